from rest_framework import serializers

from marketplace.ordering.domain.models.order import Order


class OrderSerializer(serializers.ModelSerializer):
    """Buyer view of an order, pickup code included"""

    product_id = serializers.UUIDField(source="product.id", read_only=True)
    product_title = serializers.CharField(source="product.title", read_only=True)
    product_image = serializers.CharField(source="product.image_url", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "product_id",
            "product_title",
            "product_image",
            "shop_name",
            "shop_address",
            "pickup_code",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderBuyerSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    full_name = serializers.CharField(source="display_name")
    email = serializers.EmailField()


class SellerOrderSerializer(serializers.ModelSerializer):
    """
    Shopkeeper view of an order: product and buyer details, never the pickup
    code (the buyer shows it at the counter).
    """

    product_id = serializers.UUIDField(source="product.id", read_only=True)
    product_title = serializers.CharField(source="product.title", read_only=True)
    product_price = serializers.DecimalField(
        source="product.price", max_digits=12, decimal_places=2, read_only=True
    )
    product_image = serializers.CharField(source="product.image_url", read_only=True)
    buyer = OrderBuyerSerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "product_id",
            "product_title",
            "product_price",
            "product_image",
            "buyer",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReserveSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class PickupVerifySerializer(serializers.Serializer):
    code = serializers.CharField(max_length=10, help_text="4-digit code shown by the buyer")
