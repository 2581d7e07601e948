from rest_framework import serializers
from api.models import CustomUser


class UserListSerializer(serializers.ModelSerializer):
    status = serializers.SerializerMethodField()
    businessName = serializers.CharField(source='vendor.businessName', read_only=True, default=None)
    kycStatus = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = ['id', 'phone', 'email', 'name', 'role', 'is_active', 'status',
                  'businessName', 'kycStatus', 'createdAt', 'last_login']
        read_only_fields = fields

    def get_status(self, obj):
        return 'ACTIVE' if obj.is_active else 'SUSPENDED'

    def get_kycStatus(self, obj):
        for profile in ('vendor', 'rider'):
            related = getattr(obj, profile, None)
            if related is not None:
                return related.kycStatus
        return None


class UserStatusSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True)
