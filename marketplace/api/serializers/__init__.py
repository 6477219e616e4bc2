# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import (
    AdminStatsResponseSerializer,
    CategoryCountSerializer,
    ClickResponseSerializer,
    ClicksPerProductSerializer,
    ErrorResponseSerializer,
    ProductPageResponseSerializer,
    SellerDashboardResponseSerializer,
    ViewsPerDaySerializer,
)


__all__ = [
    "AdminStatsResponseSerializer",
    "CategoryCountSerializer",
    "ClickResponseSerializer",
    "ClicksPerProductSerializer",
    "ErrorResponseSerializer",
    "ProductPageResponseSerializer",
    "SellerDashboardResponseSerializer",
    "ViewsPerDaySerializer",
]
