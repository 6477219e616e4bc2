from rest_framework import serializers

from .models import ClickLog, SearchLog


class SearchLogSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source="user.email", read_only=True, default=None)

    class Meta:
        model = SearchLog
        fields = ["id", "query", "user", "user_email", "results_count", "created_at"]
        read_only_fields = fields


class ClickLogSerializer(serializers.ModelSerializer):
    product_title = serializers.CharField(source="product.title", read_only=True)
    seller_id = serializers.IntegerField(source="product.seller_id", read_only=True)

    class Meta:
        model = ClickLog
        fields = ["id", "product", "product_title", "seller_id", "user", "source", "created_at"]
        read_only_fields = fields
