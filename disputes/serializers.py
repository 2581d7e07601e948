from rest_framework import serializers
from .models import Dispute


class DisputeSerializer(serializers.ModelSerializer):
    customerPhone = serializers.CharField(source='customer.phone', read_only=True)

    class Meta:
        model = Dispute
        fields = ['id', 'order', 'customer', 'customerPhone', 'reason', 'description',
                  'status', 'resolution', 'resolvedAt', 'createdAt']
        read_only_fields = fields


class CreateDisputeSerializer(serializers.Serializer):
    orderId = serializers.IntegerField()
    reason = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
