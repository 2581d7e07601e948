from django.contrib import admin
from .models import Payout, VendorWallet, WalletTransaction


@admin.register(VendorWallet)
class VendorWalletAdmin(admin.ModelAdmin):
    list_display = ('vendor', 'currency', 'withdrawalsLocked', 'createdAt')
    list_filter = ('withdrawalsLocked',)
    search_fields = ('vendor__businessName', 'vendor__user__phone')


@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ('wallet', 'type', 'amount', 'referenceType', 'referenceId', 'createdAt')
    list_filter = ('type', 'referenceType')

    # Ledger rows are append-only
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Payout)
class PayoutAdmin(admin.ModelAdmin):
    list_display = ('reference', 'wallet', 'amount', 'method', 'status', 'createdAt')
    list_filter = ('status', 'method')
    search_fields = ('reference', 'phone')
