"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    error = serializers.CharField(help_text="Error code identifier")
    detail = serializers.CharField(help_text="Human-readable error message")


# ===== Product Response Serializers =====


class ProductPageResponseSerializer(serializers.Serializer):
    """Paginated product list response"""

    count = serializers.IntegerField(help_text="Total number of products")
    page = serializers.IntegerField(help_text="Current page number")
    page_size = serializers.IntegerField(help_text="Items per page")
    num_pages = serializers.IntegerField(help_text="Total number of pages")
    has_next = serializers.BooleanField(help_text="Whether there is a next page")
    has_previous = serializers.BooleanField(help_text="Whether there is a previous page")
    results = serializers.ListField(
        child=serializers.DictField(), help_text="List of products (see ProductListSerializer schema)"
    )


class ClickResponseSerializer(serializers.Serializer):
    clicks = serializers.IntegerField(help_text="Click counter after this click")


# ===== Analytics Response Serializers =====


class ClicksPerProductSerializer(serializers.Serializer):
    name = serializers.CharField()
    clicks = serializers.IntegerField()
    views = serializers.IntegerField()


class CategoryCountSerializer(serializers.Serializer):
    category = serializers.CharField()
    count = serializers.IntegerField()


class ViewsPerDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    views = serializers.IntegerField()


class SellerDashboardResponseSerializer(serializers.Serializer):
    """Shopkeeper dashboard numbers"""

    totalProducts = serializers.IntegerField()
    totalViews = serializers.IntegerField()
    totalClicks = serializers.IntegerField()
    conversionRate = serializers.IntegerField(help_text="round(clicks / views * 100), 0 without views")
    clicksPerProduct = ClicksPerProductSerializer(many=True, help_text="Top 5 products by clicks")
    productsByCategory = CategoryCountSerializer(many=True)
    viewsOverTime = ViewsPerDaySerializer(many=True, help_text="Detail views for the last 7 days")
    orders = serializers.DictField(child=serializers.IntegerField(), help_text="Order count per status")
    pendingOrders = serializers.IntegerField()


class AdminStatsResponseSerializer(serializers.Serializer):
    """Platform-wide counters"""

    totalUsers = serializers.IntegerField()
    totalSellers = serializers.IntegerField()
    pendingSellers = serializers.IntegerField()
    totalProducts = serializers.IntegerField()
    totalSearches = serializers.IntegerField()
    totalViews = serializers.IntegerField()
    totalClicks = serializers.IntegerField()
    totalOrders = serializers.IntegerField()
