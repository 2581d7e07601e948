"""
Vendor wallet ledger.

Every movement of money is a new WalletTransaction row; rows are never
updated or deleted. Balances are derived by summing postings at read time:

    pending   = CREDIT_PENDING - CREDIT_AVAILABLE(order) - REVERSAL(order)
    available = CREDIT_AVAILABLE - DEBIT_WITHDRAWAL + REVERSAL(payout)

A REVERSAL referencing an order undoes a pending credit (order cancelled);
a REVERSAL referencing a payout returns a failed withdrawal to available.
"""
import logging
import secrets
import time

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Q, Sum
from django.utils import timezone

from adminsettings.services import get_min_withdrawal
from api.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from api.phone import normalize_cameroon_phone
from .models import Payout, VendorWallet, WalletTransaction

logger = logging.getLogger(__name__)

T = WalletTransaction


def get_or_create_wallet(vendor):
    wallet, _ = VendorWallet.objects.get_or_create(
        vendor=vendor,
        defaults={"currency": settings.MARKETPLACE['CURRENCY']},
    )
    return wallet


def _sum(wallet, condition):
    return wallet.transactions.filter(condition, status=T.POSTED).aggregate(total=Sum('amount'))['total'] or 0


def get_balances(wallet):
    pending = (
        _sum(wallet, Q(type=T.CREDIT_PENDING))
        - _sum(wallet, Q(type=T.CREDIT_AVAILABLE, referenceType=T.ORDER))
        - _sum(wallet, Q(type=T.REVERSAL, referenceType=T.ORDER))
    )
    available = (
        _sum(wallet, Q(type=T.CREDIT_AVAILABLE))
        - _sum(wallet, Q(type=T.DEBIT_WITHDRAWAL))
        + _sum(wallet, Q(type=T.REVERSAL, referenceType=T.PAYOUT))
    )
    return {
        'pendingBalance': pending,
        'availableBalance': available,
        'currency': wallet.currency,
    }


def _post(wallet, type, amount, reference_type, reference_id, description=''):
    """
    Append a posting. Returns the existing row instead when the same
    (type, reference) was already posted, which makes every credit idempotent.
    """
    existing = wallet.transactions.filter(
        type=type, referenceType=reference_type, referenceId=str(reference_id)
    ).first()
    if existing:
        return existing, False
    try:
        with transaction.atomic():
            entry = WalletTransaction.objects.create(
                wallet=wallet,
                type=type,
                amount=amount,
                currency=wallet.currency,
                referenceType=reference_type,
                referenceId=str(reference_id),
                description=description,
            )
    except IntegrityError:
        # Lost a race against an identical posting
        return wallet.transactions.get(
            type=type, referenceType=reference_type, referenceId=str(reference_id)
        ), False
    logger.info("Wallet %s: posted %s %s %s for %s %s",
                wallet.id, type, amount, wallet.currency, reference_type, reference_id)
    return entry, True


def credit_pending(vendor, order, amount):
    """Record vendor earnings for a confirmed order; not withdrawable yet."""
    if amount <= 0:
        raise ValidationError("Amount must be positive")
    wallet = get_or_create_wallet(vendor)
    entry, _ = _post(wallet, T.CREDIT_PENDING, amount, T.ORDER, order.id,
                     f"Earnings for order #{order.id} (pending)")
    return entry


def _pending_for_order(wallet, order):
    credited = wallet.transactions.filter(
        type=T.CREDIT_PENDING, referenceType=T.ORDER, referenceId=str(order.id)
    ).first()
    if credited is None:
        return None, 0
    settled = wallet.transactions.filter(
        type__in=[T.CREDIT_AVAILABLE, T.REVERSAL], referenceType=T.ORDER, referenceId=str(order.id)
    ).exists()
    return credited, 0 if settled else credited.amount


def promote_to_available(vendor, order):
    """
    Release the pending credit of a completed order to the available balance.

    Appends a CREDIT_AVAILABLE posting for the same amount. A no-op when the
    order has no outstanding pending credit.
    """
    wallet = get_or_create_wallet(vendor)
    _, outstanding = _pending_for_order(wallet, order)
    if outstanding <= 0:
        return None
    entry, _ = _post(wallet, T.CREDIT_AVAILABLE, outstanding, T.ORDER, order.id,
                     f"Earnings for order #{order.id} released")
    return entry


def reverse_pending(vendor, order, reason=''):
    """Undo the pending credit of a cancelled order."""
    wallet = get_or_create_wallet(vendor)
    _, outstanding = _pending_for_order(wallet, order)
    if outstanding <= 0:
        return None
    entry, _ = _post(wallet, T.REVERSAL, outstanding, T.ORDER, order.id,
                     reason or f"Order #{order.id} cancelled")
    return entry


def generate_payout_reference():
    stamp = _base36(int(time.time() * 1000))
    return f"PAYOUT-{stamp}-{secrets.token_hex(4)}".upper()


def _base36(number):
    digits = '0123456789abcdefghijklmnopqrstuvwxyz'
    out = ''
    while number:
        number, rem = divmod(number, 36)
        out = digits[rem] + out
    return out or '0'


def request_withdrawal(vendor, amount, method, phone):
    """
    Withdraw from the available balance to mobile money.

    Appends a DEBIT_WITHDRAWAL posting and creates a REQUESTED payout that an
    admin processes by hand.
    """
    min_amount = get_min_withdrawal()
    max_amount = settings.MARKETPLACE['MAX_WITHDRAWAL']
    currency = settings.MARKETPLACE['CURRENCY']

    if amount is None or amount <= 0:
        raise ValidationError("Amount must be positive")
    if amount < min_amount:
        raise ValidationError(f"Minimum withdrawal is {min_amount} {currency}")
    if amount > max_amount:
        raise ValidationError(f"Maximum withdrawal is {max_amount} {currency}")
    if method not in dict(Payout.METHOD_CHOICES):
        raise ValidationError("Payout method must be CM_MOMO or CM_OM")
    phone = normalize_cameroon_phone(phone)

    wallet = get_or_create_wallet(vendor)
    with transaction.atomic():
        # Serialize withdrawals per wallet
        wallet = VendorWallet.objects.select_for_update().get(pk=wallet.pk)
        if wallet.withdrawalsLocked:
            raise ForbiddenError(f"Withdrawals are locked: {wallet.lockReason or 'contact support'}")

        available = get_balances(wallet)['availableBalance']
        if amount > available:
            raise ValidationError(
                f"Insufficient balance. Available: {available} {currency}, Requested: {amount} {currency}"
            )

        payout = Payout.objects.create(
            wallet=wallet,
            amount=amount,
            currency=wallet.currency,
            method=method,
            phone=phone,
            reference=generate_payout_reference(),
        )
        _post(wallet, T.DEBIT_WITHDRAWAL, amount, T.PAYOUT, payout.id,
              f"Withdrawal {payout.reference}")

    logger.info("Payout %s requested by vendor %s: %s %s", payout.reference, vendor.id, amount, currency)
    return payout


def _get_payout_for_update(payout_id):
    try:
        return Payout.objects.select_for_update().get(pk=payout_id)
    except Payout.DoesNotExist:
        raise NotFoundError("Payout not found")


@transaction.atomic
def mark_payout_processing(payout_id):
    payout = _get_payout_for_update(payout_id)
    if payout.status != Payout.REQUESTED:
        raise InvalidStateError(f"Cannot process payout with status {payout.status}")
    payout.status = Payout.PROCESSING
    payout.processedAt = timezone.now()
    payout.save(update_fields=['status', 'processedAt'])
    logger.info("Payout %s processing", payout.reference)
    return payout


@transaction.atomic
def mark_payout_success(payout_id, provider_ref=None):
    payout = _get_payout_for_update(payout_id)
    if payout.status not in (Payout.REQUESTED, Payout.PROCESSING):
        raise InvalidStateError(f"Cannot complete payout with status {payout.status}")
    payout.status = Payout.SUCCESS
    payout.providerRef = provider_ref
    payout.completedAt = timezone.now()
    payout.save(update_fields=['status', 'providerRef', 'completedAt'])
    logger.info("Payout %s succeeded (provider ref %s)", payout.reference, provider_ref)
    return payout


@transaction.atomic
def mark_payout_failed(payout_id, reason):
    """Fail a payout and return the withdrawn amount to the available balance."""
    if not reason or not str(reason).strip():
        raise ValidationError("A failure reason is required")
    payout = _get_payout_for_update(payout_id)
    if payout.status not in (Payout.REQUESTED, Payout.PROCESSING):
        raise InvalidStateError(f"Cannot fail payout with status {payout.status}")
    payout.status = Payout.FAILED
    payout.failureReason = reason
    payout.failedAt = timezone.now()
    payout.save(update_fields=['status', 'failureReason', 'failedAt'])
    _post(payout.wallet, T.REVERSAL, payout.amount, T.PAYOUT, payout.id,
          f"Payout {payout.reference} failed: {reason}")
    logger.warning("Payout %s failed: %s", payout.reference, reason)
    return payout


def set_withdrawals_locked(vendor, locked, reason=None):
    wallet = get_or_create_wallet(vendor)
    if locked and not (reason and str(reason).strip()):
        raise ValidationError("A reason is required to lock withdrawals")
    wallet.withdrawalsLocked = locked
    wallet.lockReason = reason if locked else None
    wallet.save(update_fields=['withdrawalsLocked', 'lockReason'])
    logger.info("Withdrawals for vendor %s %s", vendor.id, "locked" if locked else "unlocked")
    return wallet


def get_wallet_summary(vendor):
    wallet = get_or_create_wallet(vendor)
    return {
        **get_balances(wallet),
        'withdrawalsLocked': wallet.withdrawalsLocked,
        'lockReason': wallet.lockReason,
        'recentTransactions': list(wallet.transactions.all()[:10]),
        'pendingPayouts': wallet.payouts.filter(status__in=[Payout.REQUESTED, Payout.PROCESSING]).count(),
    }
