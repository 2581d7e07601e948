from django.conf import settings
from django.db.models import Count
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from api.models import CustomUser
from api.permissions import IsAdmin
from disputes.models import Dispute
from kyc.models import KycSubmission
from orders.models import Order
from wallet.models import Payout
from . import services
from .models import AdminSetting
from .serializers import AdminSettingSerializer, DeliveryPricingSerializer, MinWithdrawalSerializer


@api_view(['GET'])
@permission_classes([AllowAny])
def getPublicDeliveryPricing(request):
    return Response({**services.get_delivery_pricing(), "currency": settings.MARKETPLACE["CURRENCY"]})


@api_view(['GET', 'PUT'])
@permission_classes([IsAdmin])
def deliveryPricing(request):
    if request.method == 'PUT':
        serializer = DeliveryPricingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.update_delivery_pricing(
            serializer.validated_data['sameTownFee'], serializer.validated_data['otherCityFee']
        )
        return Response({"message": "Delivery pricing updated", "data": services.get_delivery_pricing()})
    return Response({"data": services.get_delivery_pricing()})


@api_view(['GET', 'PUT'])
@permission_classes([IsAdmin])
def minWithdrawal(request):
    if request.method == 'PUT':
        serializer = MinWithdrawalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.update_min_withdrawal(serializer.validated_data['amount'])
        return Response({"message": "Minimum withdrawal updated", "data": {"amount": services.get_min_withdrawal()}})
    return Response({"data": {"amount": services.get_min_withdrawal()}})


@api_view(['GET'])
@permission_classes([IsAdmin])
def getSettings(request):
    settings_list = AdminSetting.objects.order_by('key')
    return Response({"data": AdminSettingSerializer(settings_list, many=True).data})


def _counts(queryset, field):
    return {row[field]: row['count'] for row in queryset.order_by().values(field).annotate(count=Count('id'))}


@api_view(['GET'])
@permission_classes([IsAdmin])
def getDashboardStats(request):
    users_by_role = _counts(CustomUser.objects.all(), 'role')
    orders_by_status = _counts(Order.objects.all(), 'status')
    return Response({
        "users": {
            "total": sum(users_by_role.values()),
            "byRole": users_by_role,
        },
        "orders": {
            "total": sum(orders_by_status.values()),
            "byStatus": orders_by_status,
        },
        "pendingKyc": KycSubmission.objects.filter(status=KycSubmission.PENDING).count(),
        "openDisputes": Dispute.objects.filter(status=Dispute.OPEN).count(),
        "requestedPayouts": Payout.objects.filter(status=Payout.REQUESTED).count(),
    })
