import logging

from django.db import transaction
from django.utils import timezone

from api.exceptions import InvalidStateError, NotFoundError, ValidationError
from orders.models import Order
from orders.services import cancel_order
from orders.transitions import can_cancel_order
from .models import Payment

logger = logging.getLogger(__name__)


def _lock_payment(payment_id):
    try:
        return Payment.objects.select_for_update().select_related('order').get(pk=payment_id)
    except (Payment.DoesNotExist, ValueError):
        raise NotFoundError("Payment not found")


def _check_manual(payment):
    if payment.paymentMethod == Order.COD:
        raise ValidationError("Cash on delivery payments cannot be confirmed or failed manually")
    if payment.status != Payment.INITIATED:
        raise InvalidStateError(f"Payment is already {payment.status}")


def confirm_payment(payment_id, admin, transaction_id=None):
    with transaction.atomic():
        payment = _lock_payment(payment_id)
        _check_manual(payment)
        payment.status = Payment.SUCCESS
        payment.paidAt = timezone.now()
        if transaction_id:
            payment.transactionId = transaction_id
        payment.save(update_fields=['status', 'paidAt', 'transactionId'])
    logger.info("Payment %s for order %s confirmed by admin %s", payment.id, payment.order_id, admin.id)
    return payment


def fail_payment(payment_id, admin):
    """Mark a mobile money payment failed and cancel its order while that is still possible."""
    with transaction.atomic():
        payment = _lock_payment(payment_id)
        _check_manual(payment)
        payment.status = Payment.FAILED
        payment.save(update_fields=['status'])

        if can_cancel_order(payment.order.status):
            cancel_order(payment.order_id, admin, "Payment failed")
    logger.info("Payment %s for order %s failed (admin %s)", payment.id, payment.order_id, admin.id)
    return Payment.objects.select_related('order', 'order__customer').get(pk=payment.pk)
