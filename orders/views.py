from django.http import FileResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.exceptions import ForbiddenError
from api.pagination import paginate
from api.permissions import IsAdmin, IsCustomer, IsCustomerOrAdmin
from . import services
from .models import Order
from .receipt import build_receipt_pdf
from .serializers import CancelOrderSerializer, CreateOrderSerializer, OrderSerializer


def _order_queryset():
    return Order.objects.select_related('vendor', 'customer', 'payment').prefetch_related('items')


@api_view(['POST'])
@permission_classes([IsCustomer])
def createOrder(request):
    serializer = CreateOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    order = services.create_order(
        request.user,
        items=data['items'],
        delivery={
            'deliveryAddress': data['deliveryAddress'],
            'deliveryCity': data['deliveryCity'],
            'deliveryPhone': data['deliveryPhone'],
        },
        payment_method=data['paymentMethod'],
    )
    return Response({
        "message": "Order created successfully",
        "data": OrderSerializer(order).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsCustomer])
def getOrders(request):
    orders = _order_queryset().filter(customer=request.user)
    status_filter = request.query_params.get('status')
    if status_filter:
        orders = orders.filter(status=status_filter)
    return paginate(request, orders, OrderSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def getOrder(request, orderID):
    """Get details of a specific order (customer, vendor of the order, or admin)."""
    order = services.get_order(orderID)
    services.actor_for(request.user, order)
    return Response(OrderSerializer(order).data)


@api_view(['POST'])
@permission_classes([IsCustomerOrAdmin])
def completeOrder(request, orderID):
    order = services.complete_order(orderID, request.user)
    return Response({"message": "Order marked as received", "data": OrderSerializer(order).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cancelOrder(request, orderID):
    serializer = CancelOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    order = services.cancel_order(orderID, request.user, serializer.validated_data.get('reason'))
    return Response({"message": "Order cancelled", "data": OrderSerializer(order).data})


@api_view(['GET'])
@permission_classes([IsCustomer])
def downloadReceipt(request, orderID):
    order = services.get_order(orderID)
    if order.customer_id != request.user.id:
        raise ForbiddenError("You can only download receipts for your own orders")
    buffer = build_receipt_pdf(order)
    return FileResponse(buffer, as_attachment=True, filename=f"Order_{order.id}_Receipt.pdf")


# ---------------------------------------------------
# Admin
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAdmin])
def adminListOrders(request):
    orders = _order_queryset()
    status_filter = request.query_params.get('status')
    if status_filter:
        orders = orders.filter(status=status_filter)
    vendor_id = request.query_params.get('vendorId')
    if vendor_id:
        orders = orders.filter(vendor_id=vendor_id)
    return paginate(request, orders, OrderSerializer)


@api_view(['POST'])
@permission_classes([IsAdmin])
def adminUpdateOrderStatus(request, orderID):
    """Admin override along the same transition table the other actors use."""
    actions = {
        Order.CONFIRMED: services.confirm_order,
        Order.IN_TRANSIT: services.mark_in_transit,
        Order.DELIVERED: services.mark_delivered,
        Order.COMPLETED: services.complete_order,
    }
    target = request.data.get('status')
    if target == Order.CANCELLED:
        order = services.cancel_order(orderID, request.user, request.data.get('reason'))
    elif target in actions:
        order = actions[target](orderID, request.user)
    else:
        return Response({"message": "Invalid status"}, status=status.HTTP_400_BAD_REQUEST)
    return Response({"message": "Order updated", "data": OrderSerializer(order).data})
