from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import ApprovedSellerRequired
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer, SellerDashboardResponseSerializer
from marketplace.api.views.common import service_error_response


class SellerAnalyticsView(APIView):
    """
    API view for seller dashboard analytics.
    Returns aggregated metrics for the authenticated shopkeeper.
    """

    permission_classes = [IsAuthenticated, ApprovedSellerRequired]

    @extend_schema(
        operation_id="seller_dashboard",
        summary="Shopkeeper dashboard analytics",
        responses={
            200: SellerDashboardResponseSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="An approved shop is required"),
        },
        tags=["Marketplace - Seller"],
    )
    def get(self, request):
        result = container.analytics_service().dashboard(request.user)
        if not result.ok:
            return service_error_response(result)

        serializer = SellerDashboardResponseSerializer(result.value)
        return Response(serializer.data, status=status.HTTP_200_OK)
