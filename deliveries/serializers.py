from rest_framework import serializers

from .models import DeliveryAgency, DeliveryJob, DeliveryJobLog


class DeliveryAgencySerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliveryAgency
        fields = ['id', 'user', 'name', 'phone', 'email', 'citiesCovered', 'isActive',
                  'feeSameCity', 'feeOtherCity', 'currency', 'createdAt']
        read_only_fields = ['user', 'phone', 'isActive', 'currency', 'createdAt']

    def validate_citiesCovered(self, value):
        if not isinstance(value, list) or not all(isinstance(city, str) for city in value):
            raise serializers.ValidationError("citiesCovered must be a list of city names")
        return value


class CreateAgencySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField()
    password = serializers.CharField(write_only=True, min_length=6)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    citiesCovered = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    feeSameCity = serializers.IntegerField(min_value=0, required=False)
    feeOtherCity = serializers.IntegerField(min_value=0, required=False)


class DeliveryJobLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliveryJobLog
        fields = ['event', 'previousStatus', 'newStatus', 'actorType', 'actorId', 'actorName', 'createdAt']


class DeliveryJobSerializer(serializers.ModelSerializer):
    agencyName = serializers.CharField(source='agency.name', read_only=True, default=None)
    orderStatus = serializers.CharField(source='order.status', read_only=True)
    deliveryPhone = serializers.CharField(source='order.deliveryPhone', read_only=True)

    class Meta:
        model = DeliveryJob
        fields = ['id', 'order', 'orderStatus', 'agency', 'agencyName', 'status',
                  'pickupAddress', 'pickupCity', 'dropoffAddress', 'dropoffCity', 'deliveryPhone',
                  'fee', 'acceptedAt', 'deliveredAt', 'cancelledAt', 'createdAt']
        read_only_fields = fields


class DeliveryJobDetailSerializer(DeliveryJobSerializer):
    logs = DeliveryJobLogSerializer(many=True, read_only=True)

    class Meta(DeliveryJobSerializer.Meta):
        fields = DeliveryJobSerializer.Meta.fields + ['logs']
        read_only_fields = fields
