import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from api.models import CustomUser

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def healthCheck(request):
    return Response({"status": "ok"})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def databaseHealthCheck(request):
    try:
        CustomUser.objects.count()
    except DatabaseError:
        logger.exception("Database health check failed")
        return Response({"status": "error", "db": "disconnected"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response({"status": "ok", "db": "connected"})
