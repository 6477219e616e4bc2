from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import LoginSerializer, MeSerializer, UserRegistrationSerializer, UserSerializer
from authentication.api.serializers.response_serializers import (
    AuthTokensResponseSerializer,
    ErrorResponseSerializer,
    LoginRequestSerializer,
)
from authentication.domain.services.auth_service import AuthService

from .common import error_response


class TokenIssuingView(APIView):
    """Anonymous endpoints that answer with a JWT pair and the user."""

    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    auth_service_class = AuthService
    failure_status = status.HTTP_400_BAD_REQUEST

    def get_auth_service(self):
        return self.auth_service_class()

    def respond(self, result, success_status):
        if not result.success:
            return error_response(result, default_status=self.failure_status)
        body = {
            "message": result.message,
            "access": result.access_token,
            "refresh": result.refresh_token,
            "user": UserSerializer(result.user).data,
        }
        return Response(body, status=success_status)


class LoginAPIView(TokenIssuingView):
    failure_status = status.HTTP_401_UNAUTHORIZED

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        description="""
        Authenticate user with email and password.

        The access token carries `role`, `is_shopkeeper`, `is_admin` and `full_name`
        claims for the frontend. Every attempt is recorded in the login history.
        """,
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(
                response=AuthTokensResponseSerializer,
                description="Login successful",
                examples=[
                    OpenApiExample(
                        "Successful Login",
                        value={
                            "message": "Login successful",
                            "access": "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9...",
                            "refresh": "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9...",
                            "user": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "email": "asha@example.com",
                                "full_name": "Asha Rao",
                                "role": "shopkeeper",
                                "is_shopkeeper": True,
                                "is_admin": False,
                            },
                        },
                    )
                ],
            ),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid email or password"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Account disabled"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = self.get_auth_service().login(data["email"], data["password"], request)
        return self.respond(result, status.HTTP_200_OK)


class RegisterAPIView(TokenIssuingView):

    @extend_schema(
        operation_id="auth_register",
        summary="Register new user account",
        description="""
        Create a buyer account and log it in.

        The account gets the baseline `user` role. Becoming a shopkeeper is a
        separate step (`/api/auth/seller/become-shopkeeper/`).
        """,
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(response=AuthTokensResponseSerializer, description="Registration successful"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Validation error (email exists, weak password, etc.)",
            ),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_auth_service().register(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
            full_name=serializer.validated_data.get("full_name", ""),
            request=request,
        )
        return self.respond(result, status.HTTP_201_CREATED)


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user",
        description="Current user with resolved role, profile and seller status (if any).",
        responses={200: MeSerializer},
        tags=["Authentication"],
    )
    def get(self, request):
        return Response(MeSerializer(request.user).data)
