from rest_framework import serializers

from authentication.domain.models import Seller


class SellerApplicationSerializer(serializers.ModelSerializer):
    """Become-shopkeeper form; model validators enforce the phone and pincode formats."""

    class Meta:
        model = Seller
        fields = [
            "shop_name",
            "business_type",
            "years_in_business",
            "owner_name",
            "phone_number",
            "alternate_phone",
            "whatsapp_number",
            "email",
            "address",
            "city",
            "state",
            "country",
            "pincode",
            "instagram_url",
            "website_url",
        ]

    def validate(self, attrs):
        for key in ("shop_name", "owner_name", "address", "city", "state"):
            if key in attrs:
                attrs[key] = attrs[key].strip()
                if not attrs[key]:
                    raise serializers.ValidationError({key: "This field may not be blank."})
        return attrs


class SellerSerializer(serializers.ModelSerializer):
    """Seller as shown to its owner and to admins."""

    user_email = serializers.EmailField(source="user.email", read_only=True)
    full_address = serializers.CharField(read_only=True)
    reviewed_by_email = serializers.EmailField(source="reviewed_by.email", read_only=True, default=None)

    class Meta:
        model = Seller
        fields = [
            "id",
            "user",
            "user_email",
            "shop_name",
            "business_type",
            "years_in_business",
            "owner_name",
            "phone_number",
            "alternate_phone",
            "whatsapp_number",
            "email",
            "address",
            "city",
            "state",
            "country",
            "pincode",
            "full_address",
            "instagram_url",
            "website_url",
            "status",
            "rejection_reason",
            "reviewed_at",
            "reviewed_by_email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SellerAdminDetailSerializer(SellerSerializer):
    """Admin detail view: the seller plus its products."""

    products = serializers.SerializerMethodField()

    class Meta(SellerSerializer.Meta):
        fields = SellerSerializer.Meta.fields + ["products"]
        read_only_fields = fields

    def get_products(self, obj):
        return [
            {
                "id": str(product.id),
                "title": product.title,
                "price": str(product.price),
                "category": product.category,
                "image_url": product.image_url,
                "is_active": product.is_active,
                "views": product.views,
                "clicks": product.clicks,
                "created_at": product.created_at,
            }
            for product in obj.products.order_by("-created_at")
        ]


class SellerStatusSerializer(serializers.Serializer):
    has_application = serializers.BooleanField()
    status = serializers.CharField(allow_null=True)
    rejection_reason = serializers.CharField(allow_blank=True)
    shop_name = serializers.CharField(allow_blank=True)
    submitted_at = serializers.DateTimeField(allow_null=True)


class SellerActionSerializer(serializers.Serializer):
    """Optional reason for reject/block."""

    reason = serializers.CharField(required=False, allow_blank=True, max_length=1000, default="")


class SellerStatusUpdateSerializer(serializers.Serializer):
    """Direct status update by an admin (PATCH)."""

    status = serializers.ChoiceField(choices=[choice for choice, _ in Seller.STATUS_CHOICES])
    reason = serializers.CharField(required=False, allow_blank=True, max_length=1000, default="")
