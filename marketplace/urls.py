from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import prometheus_metrics
from .catalog.api.views import AdminProductViewSet, AdminStatsView, ProductViewSet, SellerAnalyticsView
from .ordering.api.views import OrderViewSet, SellerOrderViewSet

# Create the main router
router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"orders", OrderViewSet, basename="order")
router.register(r"seller/orders", SellerOrderViewSet, basename="seller-order")
router.register(r"admin/products", AdminProductViewSet, basename="admin-product")

app_name = "marketplace"

urlpatterns = [
    path("seller/dashboard/", SellerAnalyticsView.as_view(), name="seller-dashboard"),
    path("admin/stats/", AdminStatsView.as_view(), name="admin-stats"),
    # Main API routes
    path("", include(router.urls)),
    # Prometheus metrics endpoint
    path("metrics/", prometheus_metrics.marketplace_prometheus_metrics, name="marketplace-metrics"),
]
