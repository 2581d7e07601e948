from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from api.pagination import paginate
from api.permissions import IsAdmin, IsCustomer
from . import services
from .models import Dispute
from .serializers import CreateDisputeSerializer, DisputeSerializer


@api_view(['POST'])
@permission_classes([IsCustomer])
def createDispute(request):
    serializer = CreateDisputeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    dispute = services.create_dispute(request.user, data['orderId'], data['reason'], data['description'])
    return Response({
        "message": "Dispute submitted",
        "data": DisputeSerializer(dispute).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsCustomer])
def getMyDisputes(request):
    disputes = Dispute.objects.filter(customer=request.user).select_related('customer')
    return paginate(request, disputes, DisputeSerializer)


@api_view(['GET'])
@permission_classes([IsAdmin])
def adminGetDisputes(request):
    return paginate(request, services.list_disputes(request.query_params.get('status')), DisputeSerializer)


@api_view(['POST'])
@permission_classes([IsAdmin])
def resolveDispute(request, disputeID):
    dispute = services.resolve_dispute(disputeID, request.data.get('notes'))
    return Response({"message": "Dispute resolved", "data": DisputeSerializer(dispute).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def rejectDispute(request, disputeID):
    dispute = services.reject_dispute(disputeID, request.data.get('notes'))
    return Response({"message": "Dispute rejected", "data": DisputeSerializer(dispute).data})
