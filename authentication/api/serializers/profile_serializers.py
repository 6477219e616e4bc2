from rest_framework import serializers

from authentication.domain.models import LoginEvent, Profile


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = ("full_name", "phone_number", "avatar_url", "bio", "created_at", "updated_at")
        read_only_fields = ("created_at", "updated_at")


class ProfileUpdateSerializer(serializers.Serializer):
    """Partial profile update; every field optional."""

    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    bio = serializers.CharField(max_length=500, required=False, allow_blank=True)
    avatar_url = serializers.URLField(required=False, allow_blank=True)

    def validate_full_name(self, value):
        return value.strip()


class LoginEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = LoginEvent
        fields = ("id", "email", "success", "failure_reason", "ip_address", "user_agent", "created_at")
        read_only_fields = fields
