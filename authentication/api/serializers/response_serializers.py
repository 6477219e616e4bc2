"""
Response Serializers for API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer
from .seller_serializers import SellerSerializer


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error body"""

    error = serializers.CharField(help_text="Error code, e.g. invalid_transition")
    detail = serializers.CharField(help_text="Human-readable message")


# ===== Authentication Response Serializers =====


class AuthTokensResponseSerializer(serializers.Serializer):
    """Response for successful login or registration"""

    message = serializers.CharField(help_text="Success message")
    access = serializers.CharField(help_text="JWT access token")
    refresh = serializers.CharField(help_text="JWT refresh token")
    user = UserSerializer(help_text="User details with resolved role")


class LoginRequestSerializer(serializers.Serializer):
    """Request body for login"""

    email = serializers.EmailField(help_text="User's email address")
    password = serializers.CharField(write_only=True, style={"input_type": "password"}, help_text="User's password")


# ===== Seller Response Serializers =====


class SellerSubmitResponseSerializer(serializers.Serializer):
    """Response for become-shopkeeper"""

    message = serializers.CharField()
    is_resubmission = serializers.BooleanField()
    seller = SellerSerializer()


class SellerActionResponseSerializer(serializers.Serializer):
    """Response for admin moderation actions"""

    message = serializers.CharField()
    old_status = serializers.CharField()
    seller = SellerSerializer()
