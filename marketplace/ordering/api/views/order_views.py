from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import ApprovedSellerRequired
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.api.views.common import UUID_PATTERN, service_error_response
from marketplace.ordering.api.serializers import (
    OrderSerializer,
    OrderStatusSerializer,
    PickupVerifySerializer,
    ReserveSerializer,
    SellerOrderSerializer,
)
from marketplace.services import OrderService


class OrderViewSet(viewsets.ViewSet):
    """Buyer side: reserve, list and cancel."""

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def get_service(self) -> OrderService:
        return container.order_service()

    @extend_schema(
        operation_id="orders_list",
        summary="List user's orders (as buyer)",
        description="""
        **What it returns:**
        - The buyer's orders, newest first
        - Each with product title, shop name and address, and the pickup code
        """,
        responses={200: OrderSerializer(many=True)},
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        orders = self.get_service().buyer_orders(request.user)
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_reserve",
        summary="Reserve a product for pickup",
        description="""
        **What it receives:**
        - `product_id`: a visible product of another shop

        **What it returns:**
        - The pending order with its 4-digit pickup code
        """,
        request=ReserveSerializer,
        responses={
            201: OpenApiResponse(response=OrderSerializer, description="Order reserved"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Cannot order own product"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        serializer = ReserveSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().reserve(request.user, serializer.validated_data["product_id"])
        if not result.ok:
            return service_error_response(result)

        return Response(OrderSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_cancel",
        summary="Cancel a pending order (buyer)",
        request=None,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Order is not pending"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        result = self.get_service().cancel_by_buyer(pk, request.user)
        if not result.ok:
            return service_error_response(result)
        return Response(OrderSerializer(result.value).data, status=status.HTTP_200_OK)


class SellerOrderViewSet(viewsets.ViewSet):
    """Shopkeeper side: incoming orders, status changes and pickup verification."""

    permission_classes = [IsAuthenticated, ApprovedSellerRequired]
    lookup_value_regex = UUID_PATTERN

    def get_service(self) -> OrderService:
        return container.order_service()

    @extend_schema(
        operation_id="seller_orders_list",
        summary="List orders for the shopkeeper's products",
        responses={
            200: SellerOrderSerializer(many=True),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="An approved shop is required"),
        },
        tags=["Marketplace - Seller"],
    )
    def list(self, request):
        result = self.get_service().seller_orders(request.user)
        if not result.ok:
            return service_error_response(result)
        return Response(SellerOrderSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="seller_orders_status",
        summary="Change order status",
        description="""
        Allowed moves:
        - `pending` to `ready`, `completed` or `cancelled`
        - `ready` to `completed` or `cancelled`
        """,
        request=OrderStatusSerializer,
        responses={
            200: SellerOrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid order state"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Order belongs to another shop"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Seller"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = OrderStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_status(pk, request.user, serializer.validated_data["status"])
        if not result.ok:
            return service_error_response(result)
        return Response(SellerOrderSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="seller_orders_verify_pickup",
        summary="Complete an order with the buyer's pickup code",
        request=PickupVerifySerializer,
        responses={
            200: SellerOrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Code mismatch or invalid state"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Order belongs to another shop"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Seller"],
    )
    @action(detail=True, methods=["post"], url_path="verify-pickup")
    def verify_pickup(self, request, pk=None):
        serializer = PickupVerifySerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().verify_pickup(pk, request.user, serializer.validated_data["code"])
        if not result.ok:
            return service_error_response(result)
        return Response(SellerOrderSerializer(result.value).data, status=status.HTTP_200_OK)
