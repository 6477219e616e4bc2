from .admin_views import AdminProductViewSet, AdminStatsView
from .analytics_views import SellerAnalyticsView
from .product_views import ProductViewSet


__all__ = [
    "AdminProductViewSet",
    "AdminStatsView",
    "ProductViewSet",
    "SellerAnalyticsView",
]
