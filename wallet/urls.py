from django.urls import path
from .views import *

urlpatterns = [
    path('', getWalletSummary, name='getWalletSummary'),
    path('transactions/', getTransactions, name='getTransactions'),
    path('withdraw/', requestWithdrawal, name='requestWithdrawal'),
    path('payouts/', getMyPayouts, name='getMyPayouts'),

    path('admin/payouts/', getPayouts, name='getPayouts'),
    path('admin/payouts/<int:payoutID>/processing/', markPayoutProcessing, name='markPayoutProcessing'),
    path('admin/payouts/<int:payoutID>/success/', markPayoutSuccess, name='markPayoutSuccess'),
    path('admin/payouts/<int:payoutID>/failed/', markPayoutFailed, name='markPayoutFailed'),
    path('admin/vendors/<int:vendorID>/', getVendorWallet, name='getVendorWallet'),
    path('admin/vendors/<int:vendorID>/lock/', lockWithdrawals, name='lockWithdrawals'),
    path('admin/vendors/<int:vendorID>/unlock/', unlockWithdrawals, name='unlockWithdrawals'),
]
