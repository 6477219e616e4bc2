from rest_framework import serializers

from authentication.domain.models import CustomUser, Seller
from utils.rbac import ROLE_ADMIN, ROLE_SHOPKEEPER, build_role_set, pick_highest_role

from .profile_serializers import ProfileSerializer


class UserSerializer(serializers.ModelSerializer):
    """User with the resolved role, as returned by login, register and me."""

    full_name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    is_shopkeeper = serializers.SerializerMethodField()
    is_admin = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = ("id", "email", "username", "full_name", "role", "is_shopkeeper", "is_admin", "date_joined")
        read_only_fields = fields

    def get_full_name(self, obj):
        profile = getattr(obj, "profile", None)
        return profile.full_name if profile else ""

    def get_role(self, obj):
        return pick_highest_role(build_role_set(obj))

    def get_is_shopkeeper(self, obj):
        return ROLE_SHOPKEEPER in build_role_set(obj)

    def get_is_admin(self, obj):
        return ROLE_ADMIN in build_role_set(obj)


class MeSerializer(UserSerializer):
    """Current user plus profile and seller status."""

    profile = ProfileSerializer(read_only=True)
    seller_status = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ("profile", "seller_status")
        read_only_fields = fields

    def get_seller_status(self, obj):
        seller = Seller.objects.filter(user=obj).only("status").first()
        return seller.status if seller else None


class UserRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, style={"input_type": "password"})
    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")

    def validate_email(self, value):
        return value.strip().lower()


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
