from rest_framework import serializers

from .models import AdminSetting


class AdminSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminSetting
        fields = ['key', 'value', 'description', 'updatedAt']


class DeliveryPricingSerializer(serializers.Serializer):
    sameTownFee = serializers.IntegerField(min_value=0)
    otherCityFee = serializers.IntegerField(min_value=0)


class MinWithdrawalSerializer(serializers.Serializer):
    amount = serializers.IntegerField(min_value=0)
