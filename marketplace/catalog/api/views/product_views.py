from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ClickResponseSerializer, ErrorResponseSerializer, ProductPageResponseSerializer
from marketplace.api.views.common import UUID_PATTERN, int_param, service_error_response
from marketplace.catalog.api.serializers import (
    MyProductSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    ProductWriteSerializer,
)
from marketplace.catalog.domain.models.catalog import Product
from marketplace.services import CatalogService


MAX_PAGE_SIZE = 100


class ProductViewSet(viewsets.ModelViewSet):
    """
    ViewSet for products using the catalog service.

    Browsing, detail and card clicks are public; writes go through the
    service, which enforces approved-shop and ownership rules.
    """

    queryset = Product.objects.all()
    lookup_value_regex = UUID_PATTERN
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def get_serializer_class(self):
        if self.action in ["create", "update", "partial_update"]:
            return ProductWriteSerializer
        elif self.action == "retrieve":
            return ProductDetailSerializer
        elif self.action == "mine":
            return MyProductSerializer
        return ProductListSerializer

    def get_permissions(self):
        if self.action in ["list", "retrieve", "click"]:
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(
        operation_id="products_list",
        summary="Browse products",
        description="""
        **What it receives:**
        - `category` (optional): category name, `all` or empty for every category
        - `search` (optional): case-insensitive match on title or description
        - Pagination parameters (page, page_size)

        **What it returns:**
        - Active products of approved shops, newest first
        - Non-empty searches are recorded in the search log
        """,
        parameters=[
            OpenApiParameter(name="category", type=str, description="Filter by category"),
            OpenApiParameter(name="search", type=str, description="Search in title and description"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="page_size", type=int, description="Items per page (default: 20)"),
        ],
        responses={
            200: OpenApiResponse(response=ProductPageResponseSerializer, description="Products retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Products"],
    )
    def list(self, request, *args, **kwargs):
        service = self.get_service()
        result = service.browse(
            category=request.query_params.get("category"),
            search=request.query_params.get("search"),
            page=int_param(request, "page", 1),
            page_size=int_param(request, "page_size", 20, maximum=MAX_PAGE_SIZE),
            user=request.user,
        )

        if not result.ok:
            return service_error_response(result)

        response_data = dict(result.value)
        response_data["results"] = ProductListSerializer(result.value["results"], many=True).data
        return Response(response_data)

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product details",
        description="Counts a view and records a detail click log.",
        responses={
            200: ProductDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk, user=request.user)
        if not result.ok:
            return service_error_response(result)
        return Response(ProductDetailSerializer(result.value).data)

    @extend_schema(
        operation_id="products_create",
        summary="Create a new product (approved shopkeeper only)",
        description="""
        Multipart form with the product fields and up to 5 files under `images`
        (image/* content type, 5MB each). The first image becomes the cover.
        City, state and phone number default from the shop.
        """,
        request=ProductWriteSerializer,
        responses={
            201: OpenApiResponse(response=ProductDetailSerializer, description="Product created successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data or images"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Permission denied"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Image upload failed"),
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        images = request.FILES.getlist("images")
        result = self.get_service().create_product(request.user, serializer.validated_data, images)
        if not result.ok:
            return service_error_response(result)

        return Response(ProductDetailSerializer(result.value).data, status=status.HTTP_201_CREATED)

    def _update(self, request, pk, partial):
        serializer = self.get_serializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        images = request.FILES.getlist("images")
        result = self.get_service().update_product(pk, request.user, serializer.validated_data, images)
        if not result.ok:
            return service_error_response(result)

        return Response(ProductDetailSerializer(result.value).data)

    @extend_schema(
        operation_id="products_update",
        summary="Replace product fields (owner only)",
        request=ProductWriteSerializer,
        responses={
            200: ProductDetailSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the product owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    @extend_schema(
        operation_id="products_partial_update",
        summary="Update product fields (owner only)",
        description="Sending files under `images` replaces the stored images.",
        request=ProductWriteSerializer,
        responses={
            200: ProductDetailSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the product owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    @extend_schema(
        operation_id="products_destroy",
        summary="Delete product (owner only)",
        responses={
            204: OpenApiResponse(description="Product deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the product owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(pk, request.user)
        if not result.ok:
            return service_error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="products_click",
        summary="Track a product card click",
        request=None,
        responses={
            200: ClickResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    @action(detail=True, methods=["post"])
    def click(self, request, pk=None):
        result = self.get_service().track_click(pk, user=request.user)
        if not result.ok:
            return service_error_response(result)
        return Response({"clicks": result.value})

    @extend_schema(
        operation_id="products_mine",
        summary="Get the current shopkeeper's products",
        description="Includes inactive products, newest first.",
        responses={
            200: MyProductSerializer(many=True),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="No shop for this account"),
        },
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"])
    def mine(self, request):
        result = self.get_service().my_products(request.user)
        if not result.ok:
            return service_error_response(result)
        return Response(MyProductSerializer(result.value, many=True).data)
