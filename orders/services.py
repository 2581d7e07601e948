"""
Order workflow: checkout and every status change after it.

Each operation runs in one transaction, locks the order row, checks the
caller against the transition table and then writes the new status with
its timestamp. Wallet postings and delivery jobs follow from the new status.
"""
import logging
from collections import OrderedDict

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from adminsettings.services import get_delivery_pricing
from api.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from api.models import CustomUser
from api.phone import normalize_cameroon_phone
from deliveries.quote import calculate_quote
from deliveries.services import cancel_job_for_order, create_job_for_order
from payment.models import Payment
from products.delivery import JEMO_RIDER, calculate_delivery_fee
from products.models import Product
from products.services import visible_products
from wallet.ledger import credit_pending, promote_to_available, reverse_pending
from .emails import send_order_email
from .models import Order, OrderItem
from .transitions import ADMIN, CUSTOMER, VENDOR, validate_order_transition

logger = logging.getLogger(__name__)


def get_order(order_id):
    try:
        return Order.objects.select_related('vendor', 'customer').get(pk=order_id)
    except (Order.DoesNotExist, ValueError):
        raise NotFoundError("Order not found")


def _lock_order(order_id):
    try:
        return Order.objects.select_for_update().select_related('vendor').get(pk=order_id)
    except (Order.DoesNotExist, ValueError):
        raise NotFoundError("Order not found")


def actor_for(user, order):
    """Resolve which transition-table actor ``user`` is for ``order``."""
    if user.role == CustomUser.ADMIN:
        return ADMIN
    if user.role == CustomUser.CUSTOMER:
        if order.customer_id != user.id:
            raise ForbiddenError("You can only manage your own orders")
        return CUSTOMER
    if user.role == CustomUser.VENDOR:
        if order.vendor.user_id != user.id:
            raise ForbiddenError("You can only manage orders for your own products")
        return VENDOR
    raise ForbiddenError("You are not allowed to change this order")


def _merge_items(items):
    merged = OrderedDict()
    for item in items:
        product_id = item.get('productId')
        try:
            quantity = int(item.get('quantity', 1))
        except (TypeError, ValueError):
            raise ValidationError("Quantity must be a whole number")
        if product_id in (None, ''):
            raise ValidationError("Each item needs a productId")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        key = str(product_id)
        merged[key] = merged.get(key, 0) + quantity
    return merged


def _quote_delivery(products, delivery_city):
    """
    One delivery per order: price every product's delivery and keep the
    highest applicable fee.
    """
    pricing = get_delivery_pricing()
    best = None
    for product in products:
        quote = None
        if product.deliveryType == JEMO_RIDER:
            quote = calculate_quote(product.city, delivery_city)
        result = calculate_delivery_fee(product, delivery_city, platform_pricing=pricing, quote=quote)
        if not result['available']:
            raise ValidationError(result.get('reason') or "Delivery is not available for this order")
        if best is None or result['fee'] > best['fee']:
            best = result
    return best


def create_order(customer, items, delivery, payment_method=Order.COD):
    """
    Place an order for ``items`` ([{productId, quantity}]) from one vendor.

    Prices are snapshotted on the order items, stock is decremented with a
    conditional update and a Payment is opened in INITIATED.
    """
    if not items:
        raise ValidationError("Order must have at least one item")
    quantities = _merge_items(items)

    delivery = delivery or {}
    delivery_city = (delivery.get('deliveryCity') or '').strip()
    delivery_address = (delivery.get('deliveryAddress') or '').strip()
    if not delivery_city:
        raise ValidationError("Delivery city is required")
    if not delivery_address:
        raise ValidationError("Delivery address is required")
    delivery_phone = normalize_cameroon_phone(delivery.get('deliveryPhone') or customer.phone)

    if payment_method not in dict(Order.PAYMENT_METHOD_CHOICES):
        raise ValidationError("Payment method must be COD, MTN_MOBILE_MONEY or ORANGE_MONEY")

    try:
        products = list(visible_products().filter(pk__in=list(quantities.keys())))
    except ValueError:
        raise ValidationError("Invalid productId")
    if len(products) != len(quantities):
        raise NotFoundError("One or more products not found or unavailable")
    by_id = {str(p.id): p for p in products}
    products = [by_id[key] for key in quantities]

    vendors = {p.vendor_id for p in products}
    if len(vendors) > 1:
        raise ValidationError("All items in an order must come from the same vendor")
    methods = {p.deliveryType for p in products}
    if len(methods) > 1:
        raise ValidationError("All items in an order must use the same delivery method")

    for product in products:
        if product.stock < quantities[str(product.id)]:
            raise ValidationError(f"Insufficient stock for product: {product.name}")

    fee = _quote_delivery(products, delivery_city)
    subtotal = sum(p.effectivePrice * quantities[str(p.id)] for p in products)
    total = subtotal + fee['fee']

    with transaction.atomic():
        for product in products:
            quantity = quantities[str(product.id)]
            updated = Product.objects.filter(pk=product.pk, stock__gte=quantity).update(
                stock=F('stock') - quantity
            )
            if updated == 0:
                raise ValidationError(f"Insufficient stock for product: {product.name}")

        order = Order.objects.create(
            customer=customer,
            vendor=products[0].vendor,
            subtotal=subtotal,
            deliveryFee=fee['fee'],
            totalAmount=total,
            deliveryMethod=products[0].deliveryType,
            deliveryFeeType=fee['feeType'],
            deliveryFeeAgency_id=fee.get('agencyId'),
            deliveryFeeRule=fee.get('rule'),
            deliveryAddress=delivery_address,
            deliveryCity=delivery_city.title(),
            deliveryPhone=delivery_phone,
            paymentMethod=payment_method,
        )
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                product=product,
                productName=product.name,
                unitPrice=product.effectivePrice,
                quantity=quantities[str(product.id)],
            )
            for product in products
        ])
        Payment.objects.create(order=order, amount=total, paymentMethod=payment_method)

    logger.info("Order %s created by customer %s: subtotal=%s fee=%s (%s) total=%s",
                order.id, customer.id, subtotal, fee['fee'], fee['feeType'], total)
    send_order_email(
        order,
        subject=f"Order #{order.id} received",
        message=f"Your order #{order.id} of {total} XAF has been placed and is waiting for vendor confirmation.",
    )
    return order


def confirm_order(order_id, user):
    with transaction.atomic():
        order = _lock_order(order_id)
        actor = actor_for(user, order)
        if actor not in (VENDOR, ADMIN):
            raise ForbiddenError("Only the vendor can confirm this order")
        validate_order_transition(order.status, Order.CONFIRMED, actor)

        order.status = Order.CONFIRMED
        order.confirmedAt = timezone.now()
        order.save(update_fields=['status', 'confirmedAt'])

        if order.subtotal > 0:
            credit_pending(order.vendor, order, order.subtotal)

        if order.deliveryMethod == JEMO_RIDER:
            first_item = order.items.select_related('product').first()
            create_job_for_order(
                order,
                pickup_city=first_item.product.city if first_item else order.vendor.city,
                pickup_address=order.vendor.businessAddress,
            )

    logger.info("Order %s confirmed by %s %s", order.id, actor, user.id)
    send_order_email(order, subject=f"Order #{order.id} confirmed",
                     message=f"Your order #{order.id} has been confirmed by the vendor.")
    return order


def mark_in_transit(order_id, user):
    with transaction.atomic():
        order = _lock_order(order_id)
        actor = actor_for(user, order)
        if actor not in (VENDOR, ADMIN):
            raise ForbiddenError("Only the vendor can dispatch this order")
        if order.deliveryMethod == JEMO_RIDER:
            raise InvalidStateError(
                "Orders delivered by the platform go in transit when a delivery agency accepts the job"
            )
        validate_order_transition(order.status, Order.IN_TRANSIT, actor)

        order.status = Order.IN_TRANSIT
        order.inTransitAt = timezone.now()
        order.save(update_fields=['status', 'inTransitAt'])

    logger.info("Order %s in transit (%s %s)", order.id, actor, user.id)
    return order


def mark_delivered(order_id, user):
    with transaction.atomic():
        order = _lock_order(order_id)
        actor = actor_for(user, order)
        if actor not in (VENDOR, ADMIN):
            raise ForbiddenError("Only the vendor can mark this order delivered")
        if order.deliveryMethod == JEMO_RIDER:
            raise InvalidStateError("Orders delivered by the platform are marked delivered by the agency")
        validate_order_transition(order.status, Order.DELIVERED, actor)

        order.status = Order.DELIVERED
        order.deliveredAt = timezone.now()
        order.save(update_fields=['status', 'deliveredAt'])

    logger.info("Order %s delivered (%s %s)", order.id, actor, user.id)
    send_order_email(order, subject=f"Order #{order.id} delivered",
                     message=f"Your order #{order.id} was delivered. Please confirm you received it.")
    return order


def complete_order(order_id, user):
    """
    Customer confirms receipt. Releases the vendor's pending earnings.
    Calling it again on a COMPLETED order returns the order unchanged.
    """
    with transaction.atomic():
        order = _lock_order(order_id)
        actor = actor_for(user, order)
        if actor not in (CUSTOMER, ADMIN):
            raise ForbiddenError("Only the customer can confirm receipt of this order")
        if order.status == Order.COMPLETED:
            return order
        validate_order_transition(order.status, Order.COMPLETED, actor)

        order.status = Order.COMPLETED
        order.completedAt = timezone.now()
        order.save(update_fields=['status', 'completedAt'])

        promote_to_available(order.vendor, order)

    logger.info("Order %s completed (%s %s)", order.id, actor, user.id)
    return order


def cancel_order(order_id, user, reason=None):
    """
    Cancel an order that has not left the vendor yet.

    Restores stock, reverses any pending wallet credit and cancels the
    delivery job.
    """
    with transaction.atomic():
        order = _lock_order(order_id)
        actor = actor_for(user, order)
        validate_order_transition(order.status, Order.CANCELLED, actor)
        was_confirmed = order.status == Order.CONFIRMED

        order.status = Order.CANCELLED
        order.cancelledAt = timezone.now()
        order.cancelledBy = actor
        order.cancelReason = (reason or '').strip() or f"Cancelled by {actor}"
        order.save(update_fields=['status', 'cancelledAt', 'cancelledBy', 'cancelReason'])

        for item in order.items.all():
            Product.objects.filter(pk=item.product_id).update(stock=F('stock') + item.quantity)

        if was_confirmed:
            reverse_pending(order.vendor, order, f"Order #{order.id} cancelled: {order.cancelReason}")
        cancel_job_for_order(order, order.cancelReason)

    logger.info("Order %s cancelled by %s %s: %s", order.id, actor, user.id, order.cancelReason)
    send_order_email(order, subject=f"Order #{order.id} cancelled",
                     message=f"Order #{order.id} was cancelled. Reason: {order.cancelReason}")
    return order
