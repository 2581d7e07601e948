import logging

from django.db import transaction
from django.utils import timezone

from api.exceptions import ConflictError, ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from orders.models import Order
from .models import Dispute

logger = logging.getLogger(__name__)


def create_dispute(customer, order_id, reason, description=''):
    reason = (reason or '').strip()
    if not reason:
        raise ValidationError("A reason is required")
    try:
        order = Order.objects.get(pk=order_id)
    except (Order.DoesNotExist, ValueError):
        raise NotFoundError("Order not found")

    if order.customer_id != customer.id:
        raise ForbiddenError("You can only dispute your own orders")
    if order.status != Order.DELIVERED:
        raise ValidationError("Can only dispute delivered orders")
    if Dispute.objects.filter(order=order).exists():
        raise ConflictError("A dispute already exists for this order")

    dispute = Dispute.objects.create(
        order=order, customer=customer, reason=reason, description=(description or '').strip()
    )
    logger.info("Dispute %s opened on order %s by customer %s", dispute.id, order.id, customer.id)
    return dispute


def list_disputes(status=None):
    disputes = Dispute.objects.select_related('order', 'customer')
    if status:
        disputes = disputes.filter(status=status)
    return disputes


def _close(dispute_id, status, resolution):
    with transaction.atomic():
        try:
            dispute = Dispute.objects.select_for_update().get(pk=dispute_id)
        except Dispute.DoesNotExist:
            raise NotFoundError("Dispute not found")
        if dispute.status != Dispute.OPEN:
            raise InvalidStateError("Dispute is already resolved or rejected")
        dispute.status = status
        dispute.resolution = resolution
        dispute.resolvedAt = timezone.now()
        dispute.save(update_fields=['status', 'resolution', 'resolvedAt'])
    logger.info("Dispute %s %s", dispute.id, status.lower())
    return dispute


def resolve_dispute(dispute_id, notes=None):
    # Settlement with the customer happens outside the platform
    return _close(dispute_id, Dispute.RESOLVED, (notes or '').strip() or "Resolved by admin")


def reject_dispute(dispute_id, notes=None):
    return _close(dispute_id, Dispute.REJECTED, (notes or '').strip() or "Rejected by admin")
