from decimal import Decimal

from rest_framework import serializers

from marketplace.catalog.domain.models.catalog import Product


class ProductListSerializer(serializers.ModelSerializer):
    """Product card: just the essentials for the home page grid"""

    shop_name = serializers.CharField(source="seller.shop_name", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "title",
            "price",
            "category",
            "city",
            "state",
            "image_url",
            "shop_name",
            "views",
            "clicks",
            "created_at",
        ]
        read_only_fields = fields


class ProductSellerSerializer(serializers.Serializer):
    """Contact block of the shop shown on the product page"""

    id = serializers.IntegerField()
    shop_name = serializers.CharField()
    city = serializers.CharField()
    phone_number = serializers.CharField()
    whatsapp_number = serializers.CharField()
    user_id = serializers.UUIDField()


class ProductDetailSerializer(serializers.ModelSerializer):
    seller = ProductSellerSerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "title",
            "description",
            "price",
            "category",
            "city",
            "state",
            "phone_number",
            "image_url",
            "images",
            "is_active",
            "views",
            "clicks",
            "seller",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MyProductSerializer(serializers.ModelSerializer):
    """Shopkeeper's own listing, hidden products included"""

    class Meta:
        model = Product
        fields = [
            "id",
            "title",
            "description",
            "price",
            "category",
            "city",
            "state",
            "phone_number",
            "image_url",
            "images",
            "is_active",
            "views",
            "clicks",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    """
    Create / update payload. Sent as multipart form data; the image files are
    read from ``request.FILES`` under ``images``.
    """

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    category = serializers.ChoiceField(choices=Product.CATEGORY_CHOICES, required=False, default="Other")
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(max_length=100, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=15, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False, default=True)

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value


class AdminProductSerializer(serializers.ModelSerializer):
    shop_name = serializers.CharField(source="seller.shop_name", read_only=True)
    owner_name = serializers.CharField(source="seller.owner_name", read_only=True)
    seller_id = serializers.IntegerField(source="seller.id", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "title",
            "price",
            "category",
            "image_url",
            "is_active",
            "views",
            "clicks",
            "seller_id",
            "shop_name",
            "owner_name",
            "created_at",
        ]
        read_only_fields = fields
