from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import permissions, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from chat.api.serializers import (
    ConversationPeerSerializer,
    ConversationSerializer,
    MessagePageSerializer,
    MessageSerializer,
    SendMessageSerializer,
)
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.api.views.common import int_param, service_error_response


class ConversationViewSet(viewsets.ViewSet):
    """Inbox shared by the seller messages page and the buyer chat drawer."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="chat_conversations",
        summary="List conversations, most recent first",
        responses={200: ConversationSerializer(many=True)},
        tags=["Chat"],
    )
    def list(self, request):
        result = container.chat_service().conversations(request.user)
        if not result.ok:
            return service_error_response(result)
        return Response(result.value, status=status.HTTP_200_OK)


class MessageViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="chat_history",
        summary="Messages with a peer about a product, oldest first",
        parameters=[
            OpenApiParameter(name="peer_id", type=str, required=True, description="Other participant"),
            OpenApiParameter(name="product_id", type=str, required=True, description="Product discussed"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="page_size", type=int, description="Items per page (default: 50)"),
        ],
        responses={200: MessagePageSerializer},
        tags=["Chat"],
    )
    def list(self, request):
        params = ConversationPeerSerializer(data=request.query_params)
        if not params.is_valid():
            return Response(params.errors, status=status.HTTP_400_BAD_REQUEST)

        result = container.chat_service().history(
            request.user,
            params.validated_data["peer_id"],
            params.validated_data["product_id"],
            page=int_param(request, "page", 1),
            page_size=int_param(request, "page_size", 50, maximum=200),
        )
        if not result.ok:
            return service_error_response(result)

        response_data = dict(result.value)
        response_data["results"] = MessageSerializer(result.value["results"], many=True).data
        return Response(response_data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="chat_send",
        summary="Send a message",
        description="Persists the message and pushes it to both participants' websockets.",
        request=SendMessageSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Empty, too long or invalid receiver"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Chat"],
    )
    def create(self, request):
        serializer = SendMessageSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = container.chat_service().send(request.user, data["receiver_id"], data["product_id"], data["content"])
        if not result.ok:
            return service_error_response(result)
        return Response(MessageSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="chat_mark_read",
        summary="Mark a conversation as read",
        request=ConversationPeerSerializer,
        responses={200: inline_serializer(name="MarkReadResponse", fields={"marked_read": serializers.IntegerField()})},
        tags=["Chat"],
    )
    @action(detail=False, methods=["post"])
    def read(self, request):
        serializer = ConversationPeerSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = container.chat_service().mark_read(
            request.user, serializer.validated_data["peer_id"], serializer.validated_data["product_id"]
        )
        if not result.ok:
            return service_error_response(result)
        return Response({"marked_read": result.value}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="chat_unread_count",
        summary="Total unread messages for the current user",
        responses={200: inline_serializer(name="UnreadCountResponse", fields={"unread": serializers.IntegerField()})},
        tags=["Chat"],
    )
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"unread": container.chat_service().unread_count(request.user)}, status=status.HTTP_200_OK)
