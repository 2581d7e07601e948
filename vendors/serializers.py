from rest_framework import serializers
from .models import VendorProfile


class VendorSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(source='user.phone', read_only=True)
    ownerName = serializers.CharField(source='user.name', read_only=True)

    class Meta:
        model = VendorProfile
        fields = ['id', 'user', 'phone', 'ownerName', 'businessName', 'businessAddress', 'city', 'kycStatus', 'createdAt']
        read_only_fields = ['user', 'kycStatus', 'createdAt']

    def validate_businessName(self, value):
        if not value.strip():
            raise serializers.ValidationError("Business name cannot be empty")
        return value.strip()

    def validate_businessAddress(self, value):
        if not value.strip():
            raise serializers.ValidationError("Business address cannot be empty")
        return value.strip()
