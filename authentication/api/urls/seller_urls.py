from django.urls import include, path
from rest_framework.routers import DefaultRouter

from authentication.api.views import BecomeShopkeeperView, SellerAdminViewSet, SellerStatusView


router = DefaultRouter()
router.register(r"admin/sellers", SellerAdminViewSet, basename="admin-seller")

urlpatterns = [
    path("seller/become-shopkeeper/", BecomeShopkeeperView.as_view(), name="become_shopkeeper"),
    path("seller/status/", SellerStatusView.as_view(), name="seller_status"),
    path("", include(router.urls)),
]
