from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import LoginEventSerializer, ProfileSerializer, ProfileUpdateSerializer
from authentication.domain.services.profile_service import ProfileService


def get_profile_service():
    return ProfileService()


class ProfileUpdateView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="profile_get",
        summary="Get own profile",
        responses={200: ProfileSerializer},
        tags=["Profile"],
    )
    def get(self, request):
        return Response(ProfileSerializer(request.user.profile).data)

    @extend_schema(
        operation_id="profile_update",
        summary="Update own profile",
        description="Partial update of `full_name`, `phone_number`, `bio` and `avatar_url`.",
        request=ProfileUpdateSerializer,
        responses={200: ProfileSerializer, 400: OpenApiResponse(description="Validation error")},
        tags=["Profile"],
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = get_profile_service().update_profile(request.user, serializer.validated_data)
        return Response(ProfileSerializer(result.data["profile"]).data)


class LoginHistoryView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="login_history",
        summary="Login history",
        description="The current user's last 50 login attempts, newest first.",
        responses={200: LoginEventSerializer(many=True)},
        tags=["Profile"],
    )
    def get(self, request):
        events = get_profile_service().login_history(request.user)
        return Response(LoginEventSerializer(events, many=True).data)
