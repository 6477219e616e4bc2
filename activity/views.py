import logging

from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import AdminRequired

from .models import ClickLog, SearchLog
from .serializers import ClickLogSerializer, SearchLogSerializer

logger = logging.getLogger(__name__)

LOG_LIMIT = 100


@extend_schema(
    summary="Latest search logs (Admin only)",
    description="The latest 100 searches, newest first.",
    responses={200: SearchLogSerializer(many=True)},
    tags=["Activity (Admin)"],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, AdminRequired])
def search_logs(request):
    logs = SearchLog.objects.select_related('user').order_by('-created_at')[:LOG_LIMIT]
    return Response(SearchLogSerializer(logs, many=True).data)


@extend_schema(
    summary="Latest click logs (Admin only)",
    description="The latest 100 product clicks and detail views, newest first, with product title and seller id.",
    responses={200: ClickLogSerializer(many=True)},
    tags=["Activity (Admin)"],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, AdminRequired])
def click_logs(request):
    logs = ClickLog.objects.select_related('product').order_by('-created_at')[:LOG_LIMIT]
    return Response(ClickLogSerializer(logs, many=True).data)
