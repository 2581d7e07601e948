from django.db.models import Count, Q, Sum
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from api.exceptions import NotFoundError
from api.pagination import paginate
from api.permissions import IsAdmin, IsVendor
from orders import services as order_services
from orders.models import Order
from orders.serializers import CancelOrderSerializer, OrderSerializer
from .models import VendorProfile
from .serializers import VendorSerializer


def _vendor_for(user):
    try:
        return VendorProfile.objects.select_related('user').get(user=user)
    except VendorProfile.DoesNotExist:
        raise NotFoundError("Vendor profile not found")


# Get Vendor Profile
@api_view(['GET'])
@permission_classes([IsVendor])
def getVendorProfile(request):
    vendor = _vendor_for(request.user)
    return Response({
        "message": "Vendor profile fetched successfully",
        "data": VendorSerializer(vendor).data
    }, status=status.HTTP_200_OK)


# Update Vendor Profile
@api_view(['PUT', 'PATCH'])
@permission_classes([IsVendor])
def updateVendorProfile(request):
    vendor = _vendor_for(request.user)
    serializer = VendorSerializer(vendor, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response({
        "message": "Vendor profile updated successfully",
        "data": serializer.data
    }, status=status.HTTP_200_OK)


### Vendor orders
@api_view(['GET'])
@permission_classes([IsVendor])
def getVendorOrders(request):
    vendor = _vendor_for(request.user)
    orders = (
        Order.objects.filter(vendor=vendor)
        .select_related('vendor', 'customer', 'payment')
        .prefetch_related('items')
    )
    status_filter = request.query_params.get('status')
    if status_filter:
        orders = orders.filter(status=status_filter)
    return paginate(request, orders, OrderSerializer)


@api_view(['POST'])
@permission_classes([IsVendor])
def confirmOrder(request, orderID):
    order = order_services.confirm_order(orderID, request.user)
    return Response({"message": "Order confirmed", "data": OrderSerializer(order).data})


@api_view(['POST'])
@permission_classes([IsVendor])
def markOrderInTransit(request, orderID):
    order = order_services.mark_in_transit(orderID, request.user)
    return Response({"message": "Order is in transit", "data": OrderSerializer(order).data})


@api_view(['POST'])
@permission_classes([IsVendor])
def markOrderDelivered(request, orderID):
    order = order_services.mark_delivered(orderID, request.user)
    return Response({"message": "Order delivered", "data": OrderSerializer(order).data})


@api_view(['POST'])
@permission_classes([IsVendor])
def cancelVendorOrder(request, orderID):
    serializer = CancelOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    order = order_services.cancel_order(orderID, request.user, serializer.validated_data.get('reason'))
    return Response({"message": "Order cancelled", "data": OrderSerializer(order).data})


@api_view(['GET'])
@permission_classes([IsVendor])
def getVendorSalesSummary(request):
    vendor = _vendor_for(request.user)
    summary = Order.objects.filter(vendor=vendor).aggregate(
        totalOrders=Count('id'),
        pendingOrders=Count('id', filter=Q(status=Order.PENDING)),
        completedOrders=Count('id', filter=Q(status=Order.COMPLETED)),
        totalSales=Sum('subtotal', filter=Q(status=Order.COMPLETED)),
    )
    summary['totalSales'] = summary['totalSales'] or 0
    return Response(summary)


# ---------------------------------------------------
# Admin
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAdmin])
def getVendors(request):
    vendors = VendorProfile.objects.select_related('user').order_by('-createdAt')
    kyc_status = request.query_params.get('kycStatus')
    if kyc_status:
        vendors = vendors.filter(kycStatus=kyc_status)
    return paginate(request, vendors, VendorSerializer)


@api_view(['GET'])
@permission_classes([IsAdmin])
def getVendor(request, pk):
    try:
        vendor = VendorProfile.objects.select_related('user').get(pk=pk)
    except VendorProfile.DoesNotExist:
        raise NotFoundError("Vendor not found")
    return Response({"message": "Vendor fetched successfully", "data": VendorSerializer(vendor).data})
