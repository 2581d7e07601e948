from rest_framework import serializers
from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'productName', 'unitPrice', 'quantity', 'lineTotal']


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    vendorName = serializers.CharField(source='vendor.businessName', read_only=True)
    paymentStatus = serializers.SerializerMethodField()
    deliveryJobStatus = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'customer', 'vendor', 'vendorName', 'status',
            'subtotal', 'deliveryFee', 'totalAmount',
            'deliveryMethod', 'deliveryFeeType', 'deliveryFeeAgency', 'deliveryFeeRule',
            'deliveryAddress', 'deliveryCity', 'deliveryPhone',
            'paymentMethod', 'paymentStatus', 'deliveryJobStatus',
            'createdAt', 'confirmedAt', 'inTransitAt', 'deliveredAt', 'completedAt',
            'cancelledAt', 'cancelledBy', 'cancelReason',
            'items',
        ]
        read_only_fields = fields

    def get_paymentStatus(self, obj):
        payment = getattr(obj, 'payment', None)
        return payment.status if payment else None

    def get_deliveryJobStatus(self, obj):
        job = getattr(obj, 'deliveryJob', None)
        return job.status if job else None


class OrderItemInputSerializer(serializers.Serializer):
    productId = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=True)
    deliveryAddress = serializers.CharField(allow_blank=True, required=False, default='')
    deliveryCity = serializers.CharField(allow_blank=True, required=False, default='')
    deliveryPhone = serializers.CharField(allow_blank=True, required=False, default='')
    paymentMethod = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES, default=Order.COD)


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=1000)
