from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from api.exceptions import NotFoundError
from api.pagination import paginate
from api.permissions import IsAdmin, IsVendor
from vendors.models import VendorProfile
from . import ledger
from .models import Payout
from .serializers import (
    AdminWalletSerializer,
    PayoutSerializer,
    WalletLockSerializer,
    WalletSummarySerializer,
    WalletTransactionSerializer,
    WithdrawSerializer,
)


def _vendor_for(user):
    try:
        return VendorProfile.objects.get(user=user)
    except VendorProfile.DoesNotExist:
        raise NotFoundError("Vendor profile not found")


# ---------------------------------------------------
# Vendor
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsVendor])
def getWalletSummary(request):
    summary = ledger.get_wallet_summary(_vendor_for(request.user))
    return Response(WalletSummarySerializer(summary).data)


@api_view(['GET'])
@permission_classes([IsVendor])
def getTransactions(request):
    wallet = ledger.get_or_create_wallet(_vendor_for(request.user))
    transactions = wallet.transactions.all()
    type_filter = request.query_params.get('type')
    if type_filter:
        transactions = transactions.filter(type=type_filter)
    return paginate(request, transactions, WalletTransactionSerializer)


@api_view(['POST'])
@permission_classes([IsVendor])
def requestWithdrawal(request):
    serializer = WithdrawSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    payout = ledger.request_withdrawal(
        _vendor_for(request.user), data['amount'], data['method'], data['phone']
    )
    return Response({
        "message": "Withdrawal requested",
        "data": PayoutSerializer(payout).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsVendor])
def getMyPayouts(request):
    wallet = ledger.get_or_create_wallet(_vendor_for(request.user))
    payouts = wallet.payouts.select_related('wallet__vendor')
    status_filter = request.query_params.get('status')
    if status_filter:
        payouts = payouts.filter(status=status_filter)
    return paginate(request, payouts, PayoutSerializer)


# ---------------------------------------------------
# Admin
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAdmin])
def getPayouts(request):
    payouts = Payout.objects.select_related('wallet__vendor')
    status_filter = request.query_params.get('status')
    if status_filter:
        payouts = payouts.filter(status=status_filter)
    return paginate(request, payouts, PayoutSerializer)


@api_view(['POST'])
@permission_classes([IsAdmin])
def markPayoutProcessing(request, payoutID):
    payout = ledger.mark_payout_processing(payoutID)
    return Response({"message": "Payout is processing", "data": PayoutSerializer(payout).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def markPayoutSuccess(request, payoutID):
    payout = ledger.mark_payout_success(payoutID, request.data.get('providerRef'))
    return Response({"message": "Payout completed", "data": PayoutSerializer(payout).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def markPayoutFailed(request, payoutID):
    payout = ledger.mark_payout_failed(payoutID, request.data.get('reason'))
    return Response({"message": "Payout failed and funds returned", "data": PayoutSerializer(payout).data})


def _vendor_by_id(vendor_id):
    try:
        return VendorProfile.objects.get(pk=vendor_id)
    except VendorProfile.DoesNotExist:
        raise NotFoundError("Vendor not found")


@api_view(['GET'])
@permission_classes([IsAdmin])
def getVendorWallet(request, vendorID):
    summary = ledger.get_wallet_summary(_vendor_by_id(vendorID))
    return Response(WalletSummarySerializer(summary).data)


@api_view(['POST'])
@permission_classes([IsAdmin])
def lockWithdrawals(request, vendorID):
    serializer = WalletLockSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    wallet = ledger.set_withdrawals_locked(_vendor_by_id(vendorID), True, serializer.validated_data.get('reason'))
    return Response({"message": "Withdrawals locked", "data": AdminWalletSerializer(wallet).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def unlockWithdrawals(request, vendorID):
    wallet = ledger.set_withdrawals_locked(_vendor_by_id(vendorID), False)
    return Response({"message": "Withdrawals unlocked", "data": AdminWalletSerializer(wallet).data})
