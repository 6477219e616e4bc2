from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.filters import SellerFilter
from authentication.api.serializers import (
    SellerActionSerializer,
    SellerAdminDetailSerializer,
    SellerApplicationSerializer,
    SellerSerializer,
    SellerStatusSerializer,
    SellerStatusUpdateSerializer,
)
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    SellerActionResponseSerializer,
    SellerSubmitResponseSerializer,
)
from authentication.models import Seller
from authentication.permissions import AdminRequired
from infrastructure.container import container

from .common import error_response


def get_seller_service():
    return container.seller_service()


class BecomeShopkeeperView(APIView):
    """POST only - Submit or resubmit the shop form"""

    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["post"]

    @extend_schema(
        operation_id="seller_become_shopkeeper",
        summary="Become a shopkeeper",
        description="""
        Register a shop for review.

        **Rules:**
        - Phone numbers must have exactly 10 digits, the pincode exactly 6
        - A rejected shop may be resubmitted; it goes back to `pending`
        - A pending, approved or blocked shop cannot be submitted again
        """,
        request=SellerApplicationSerializer,
        responses={
            201: OpenApiResponse(
                response=SellerSubmitResponseSerializer,
                description="Shop submitted for review",
                examples=[
                    OpenApiExample(
                        "Submitted",
                        value={
                            "message": "Your shop has been submitted for review.",
                            "is_resubmission": False,
                            "seller": {"id": 7, "shop_name": "Rao Electronics", "status": "pending"},
                        },
                    )
                ],
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error or shop exists"),
        },
        tags=["Sellers"],
    )
    def post(self, request):
        serializer = SellerApplicationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = get_seller_service().submit_application(request.user, serializer.validated_data)
        if not result.success:
            return error_response(result)

        return Response(
            {
                "message": result.message,
                "is_resubmission": result.data["is_resubmission"],
                "seller": SellerSerializer(result.data["seller"]).data,
            },
            status=status.HTTP_201_CREATED,
        )


class SellerStatusView(APIView):
    """GET only - Own shop status"""

    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get"]

    @extend_schema(
        operation_id="seller_status",
        summary="Get own shop status",
        responses={
            200: OpenApiResponse(
                response=SellerStatusSerializer,
                description="Shop status",
                examples=[
                    OpenApiExample(
                        "Rejected",
                        value={
                            "has_application": True,
                            "status": "rejected",
                            "rejection_reason": "Address could not be verified",
                            "shop_name": "Rao Electronics",
                            "submitted_at": "2025-01-15T10:30:00Z",
                        },
                    ),
                    OpenApiExample(
                        "No shop",
                        value={
                            "has_application": False,
                            "status": None,
                            "rejection_reason": "",
                            "shop_name": "",
                            "submitted_at": None,
                        },
                    ),
                ],
            )
        },
        tags=["Sellers"],
    )
    def get(self, request):
        status_data = get_seller_service().get_status(request.user)
        return Response(SellerStatusSerializer(status_data).data)


@extend_schema_view(
    list=extend_schema(
        summary="List sellers (Admin only)",
        parameters=[
            OpenApiParameter("status", str, description="pending | approved | rejected | blocked"),
            OpenApiParameter("city", str),
            OpenApiParameter("search", str, description="Shop name, owner name or email"),
        ],
        tags=["Sellers (Admin)"],
    ),
    retrieve=extend_schema(summary="Seller detail with products (Admin only)", tags=["Sellers (Admin)"]),
)
class SellerAdminViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Admin moderation of shopkeepers.

    The action endpoints and PATCH share one transition table, so
    ``PATCH {"status": "approved"}`` and ``POST .../approve/`` are equivalent.
    """

    permission_classes = [permissions.IsAuthenticated, AdminRequired]
    queryset = Seller.objects.select_related("user", "reviewed_by").order_by("-created_at")
    filter_backends = [DjangoFilterBackend]
    filterset_class = SellerFilter

    def get_serializer_class(self):
        if self.action == "retrieve":
            return SellerAdminDetailSerializer
        return SellerSerializer

    def _respond(self, result):
        if not result.success:
            return error_response(result)
        return Response(
            {
                "message": result.message,
                "old_status": result.data["old_status"],
                "seller": SellerSerializer(result.data["seller"]).data,
            }
        )

    @extend_schema(
        summary="Set seller status directly (Admin only)",
        request=SellerStatusUpdateSerializer,
        responses={
            200: SellerActionResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid transition"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Seller not found"),
        },
        tags=["Sellers (Admin)"],
    )
    def partial_update(self, request, pk=None):
        serializer = SellerStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = get_seller_service().set_status(
            pk,
            serializer.validated_data["status"],
            request.user,
            reason=serializer.validated_data.get("reason", ""),
        )
        return self._respond(result)

    @extend_schema(
        summary="Approve seller (Admin only)",
        request=None,
        responses={200: SellerActionResponseSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Sellers (Admin)"],
    )
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        return self._respond(get_seller_service().approve(pk, request.user))

    @extend_schema(
        summary="Reject seller (Admin only)",
        request=SellerActionSerializer,
        responses={200: SellerActionResponseSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Sellers (Admin)"],
    )
    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        serializer = SellerActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._respond(get_seller_service().reject(pk, request.user, serializer.validated_data["reason"]))

    @extend_schema(
        summary="Block seller (Admin only)",
        request=SellerActionSerializer,
        responses={200: SellerActionResponseSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Sellers (Admin)"],
    )
    @action(detail=True, methods=["post"])
    def block(self, request, pk=None):
        serializer = SellerActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._respond(get_seller_service().block(pk, request.user, serializer.validated_data["reason"]))

    @extend_schema(
        summary="Unblock seller (Admin only)",
        request=None,
        responses={200: SellerActionResponseSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Sellers (Admin)"],
    )
    @action(detail=True, methods=["post"])
    def unblock(self, request, pk=None):
        return self._respond(get_seller_service().unblock(pk, request.user))
