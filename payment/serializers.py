from rest_framework import serializers
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    orderStatus = serializers.CharField(source='order.status', read_only=True)
    customerPhone = serializers.CharField(source='order.customer.phone', read_only=True)

    class Meta:
        model = Payment
        fields = ['id', 'order', 'orderStatus', 'customerPhone', 'amount', 'paymentMethod',
                  'status', 'transactionId', 'paidAt', 'createdAt']
        read_only_fields = fields
