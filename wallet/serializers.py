from rest_framework import serializers
from .models import Payout, VendorWallet, WalletTransaction


class WalletTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = WalletTransaction
        fields = ['id', 'type', 'amount', 'currency', 'status', 'referenceType', 'referenceId',
                  'description', 'createdAt']
        read_only_fields = fields


class PayoutSerializer(serializers.ModelSerializer):
    vendor = serializers.IntegerField(source='wallet.vendor_id', read_only=True)
    vendorName = serializers.CharField(source='wallet.vendor.businessName', read_only=True)

    class Meta:
        model = Payout
        fields = ['id', 'vendor', 'vendorName', 'amount', 'currency', 'method', 'phone', 'reference',
                  'status', 'providerRef', 'failureReason',
                  'createdAt', 'processedAt', 'completedAt', 'failedAt']
        read_only_fields = fields


class WalletSummarySerializer(serializers.Serializer):
    pendingBalance = serializers.IntegerField()
    availableBalance = serializers.IntegerField()
    currency = serializers.CharField()
    withdrawalsLocked = serializers.BooleanField()
    lockReason = serializers.CharField(allow_null=True)
    pendingPayouts = serializers.IntegerField()
    recentTransactions = WalletTransactionSerializer(many=True)


class WithdrawSerializer(serializers.Serializer):
    amount = serializers.IntegerField()
    method = serializers.CharField()
    phone = serializers.CharField()


class WalletLockSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AdminWalletSerializer(serializers.ModelSerializer):
    vendorName = serializers.CharField(source='vendor.businessName', read_only=True)

    class Meta:
        model = VendorWallet
        fields = ['id', 'vendor', 'vendorName', 'currency', 'withdrawalsLocked', 'lockReason', 'createdAt']
        read_only_fields = fields
