from django.db import models
from vendors.models import VendorProfile


class VendorWallet(models.Model):
    vendor = models.OneToOneField(VendorProfile, on_delete=models.CASCADE, related_name='wallet')
    currency = models.CharField(max_length=3, default='XAF')
    withdrawalsLocked = models.BooleanField(default=False)
    lockReason = models.TextField(blank=True, null=True)
    createdAt = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Wallet of {self.vendor.businessName}"


class WalletTransaction(models.Model):
    """Append-only ledger entry. Balances are sums over these rows."""

    CREDIT_PENDING = 'CREDIT_PENDING'
    CREDIT_AVAILABLE = 'CREDIT_AVAILABLE'
    DEBIT_WITHDRAWAL = 'DEBIT_WITHDRAWAL'
    REVERSAL = 'REVERSAL'
    TYPE_CHOICES = (
        (CREDIT_PENDING, 'Pending credit'),
        (CREDIT_AVAILABLE, 'Available credit'),
        (DEBIT_WITHDRAWAL, 'Withdrawal'),
        (REVERSAL, 'Reversal'),
    )

    POSTED = 'POSTED'
    STATUS_CHOICES = (
        (POSTED, 'Posted'),
    )

    ORDER = 'ORDER'
    PAYOUT = 'PAYOUT'
    ADJUSTMENT = 'ADJUSTMENT'
    REFERENCE_CHOICES = (
        (ORDER, 'Order'),
        (PAYOUT, 'Payout'),
        (ADJUSTMENT, 'Adjustment'),
    )

    wallet = models.ForeignKey(VendorWallet, on_delete=models.PROTECT, related_name='transactions')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    amount = models.PositiveIntegerField()
    currency = models.CharField(max_length=3, default='XAF')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=POSTED)
    referenceType = models.CharField(max_length=20, choices=REFERENCE_CHOICES)
    referenceId = models.CharField(max_length=64)
    description = models.CharField(max_length=255, blank=True, default='')
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-createdAt', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['wallet', 'type', 'referenceType', 'referenceId'],
                name='unique_wallet_posting',
            ),
        ]

    def __str__(self):
        return f"{self.type} {self.amount} ({self.referenceType} {self.referenceId})"


class Payout(models.Model):
    REQUESTED = 'REQUESTED'
    PROCESSING = 'PROCESSING'
    SUCCESS = 'SUCCESS'
    FAILED = 'FAILED'
    STATUS_CHOICES = (
        (REQUESTED, 'Requested'),
        (PROCESSING, 'Processing'),
        (SUCCESS, 'Success'),
        (FAILED, 'Failed'),
    )

    CM_MOMO = 'CM_MOMO'
    CM_OM = 'CM_OM'
    METHOD_CHOICES = (
        (CM_MOMO, 'MTN Mobile Money'),
        (CM_OM, 'Orange Money'),
    )

    wallet = models.ForeignKey(VendorWallet, on_delete=models.PROTECT, related_name='payouts')
    amount = models.PositiveIntegerField()
    currency = models.CharField(max_length=3, default='XAF')
    method = models.CharField(max_length=10, choices=METHOD_CHOICES)
    phone = models.CharField(max_length=13)
    reference = models.CharField(max_length=64, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=REQUESTED)
    providerRef = models.CharField(max_length=100, blank=True, null=True)
    failureReason = models.TextField(blank=True, null=True)
    createdAt = models.DateTimeField(auto_now_add=True)
    processedAt = models.DateTimeField(null=True, blank=True)
    completedAt = models.DateTimeField(null=True, blank=True)
    failedAt = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-createdAt']

    def __str__(self):
        return f"{self.reference} - {self.amount} {self.currency} ({self.status})"
