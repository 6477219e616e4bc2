from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.api.views import LoginAPIView, LoginHistoryView, MeView, ProfileUpdateView, RegisterAPIView


urlpatterns = [
    # Auth
    path("register/", RegisterAPIView.as_view(), name="register"),
    path("login/", LoginAPIView.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("me/", MeView.as_view(), name="me"),
    # Profile
    path("profile/", ProfileUpdateView.as_view(), name="profile"),
    path("login-history/", LoginHistoryView.as_view(), name="login_history"),
]
