from django.urls import include, path


app_name = "authentication"

urlpatterns = [
    path("", include("authentication.api.urls.auth_urls")),
    path("", include("authentication.api.urls.seller_urls")),
]
