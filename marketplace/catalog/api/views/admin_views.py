from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import AdminRequired
from infrastructure.container import container
from marketplace.api.serializers import AdminStatsResponseSerializer, ErrorResponseSerializer
from marketplace.api.views.common import UUID_PATTERN, service_error_response
from marketplace.catalog.api.serializers import AdminProductSerializer
from marketplace.catalog.domain.models.catalog import Product
from marketplace.filters import ProductFilter


class AdminStatsView(APIView):
    permission_classes = [IsAuthenticated, AdminRequired]

    @extend_schema(
        operation_id="admin_stats",
        summary="Platform statistics (admin only)",
        responses={200: AdminStatsResponseSerializer},
        tags=["Marketplace - Admin"],
    )
    def get(self, request):
        result = container.admin_service().stats()
        if not result.ok:
            return service_error_response(result)
        return Response(AdminStatsResponseSerializer(result.value).data, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(
        operation_id="admin_products_list",
        summary="All products with shop and owner (admin only)",
        tags=["Marketplace - Admin"],
    ),
    destroy=extend_schema(
        operation_id="admin_products_destroy",
        summary="Remove a product (admin moderation)",
        responses={
            204: OpenApiResponse(description="Product deleted"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Admin"],
    ),
)
class AdminProductViewSet(mixins.ListModelMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """Moderation list of every product, hidden ones included."""

    serializer_class = AdminProductSerializer
    permission_classes = [IsAuthenticated, AdminRequired]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        return Product.objects.select_related("seller").order_by("-created_at")

    def destroy(self, request, pk=None):
        result = container.catalog_service().delete_product(pk, request.user)
        if not result.ok:
            return service_error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
