import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from api.exceptions import ConflictError, ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from api.models import CustomUser
from api.phone import normalize_cameroon_phone
from orders.models import Order
from orders.transitions import (
    AGENCY,
    SYSTEM,
    validate_agency_owns_job,
    validate_job_transition,
    validate_order_transition,
)
from products.delivery import normalize_city
from .models import DeliveryAgency, DeliveryJob, DeliveryJobLog
from .quote import agency_covers

logger = logging.getLogger(__name__)


def log_job_event(job, event, previous_status, new_status, actor_type, actor_id=None, actor_name=''):
    return DeliveryJobLog.objects.create(
        job=job,
        event=event,
        previousStatus=previous_status,
        newStatus=new_status,
        actorType=actor_type,
        actorId=str(actor_id) if actor_id is not None else None,
        actorName=actor_name,
    )


def get_active_agency(user):
    try:
        agency = DeliveryAgency.objects.get(user=user)
    except DeliveryAgency.DoesNotExist:
        raise NotFoundError("Delivery agency profile not found")
    if not agency.isActive:
        raise ForbiddenError("Your agency is not active. Contact admin for assistance.")
    return agency


def create_job_for_order(order, pickup_city, pickup_address=''):
    """Open a delivery job for a confirmed platform-delivered order (once)."""
    job, created = DeliveryJob.objects.get_or_create(
        order=order,
        defaults={
            'pickupCity': pickup_city,
            'pickupAddress': pickup_address,
            'dropoffCity': order.deliveryCity,
            'dropoffAddress': order.deliveryAddress,
            'fee': order.deliveryFee,
        },
    )
    if created:
        log_job_event(job, 'CREATED', None, DeliveryJob.OPEN, 'SYSTEM')
        logger.info("Delivery job %s opened for order %s (%s -> %s)",
                    job.id, order.id, pickup_city, order.deliveryCity)
    return job


def cancel_job_for_order(order, reason=''):
    """Cancel the order's delivery job if it has not been delivered yet."""
    try:
        job = DeliveryJob.objects.select_for_update().get(order=order)
    except DeliveryJob.DoesNotExist:
        return None
    if job.status not in (DeliveryJob.OPEN, DeliveryJob.ACCEPTED):
        return job
    validate_job_transition(job.status, DeliveryJob.CANCELLED, SYSTEM)
    previous = job.status
    job.status = DeliveryJob.CANCELLED
    job.cancelledAt = timezone.now()
    job.save(update_fields=['status', 'cancelledAt'])
    log_job_event(job, 'CANCELLED', previous, DeliveryJob.CANCELLED, 'SYSTEM', actor_name=reason)
    logger.info("Delivery job %s cancelled with order %s", job.id, order.id)
    return job


def list_available_jobs(user):
    """OPEN, unassigned jobs whose pickup city the caller's agency covers."""
    agency = get_active_agency(user)
    covered = {normalize_city(city) for city in agency.citiesCovered or []}
    jobs = (
        DeliveryJob.objects
        .filter(status=DeliveryJob.OPEN, agency__isnull=True)
        .select_related('order', 'order__vendor')
        .order_by('-createdAt')
    )
    return [job for job in jobs if normalize_city(job.pickupCity) in covered]


def accept_job(user, job_id):
    """
    Claim an OPEN job for the caller's agency.

    The order row is locked first, matching order cancellation, then the
    claim is a single conditional UPDATE on status=OPEN so that when two
    agencies race exactly one row update succeeds; the loser gets a 409.
    """
    agency = get_active_agency(user)
    try:
        job = DeliveryJob.objects.get(pk=job_id)
    except DeliveryJob.DoesNotExist:
        raise NotFoundError("Delivery job not found")

    if job.status == DeliveryJob.CANCELLED:
        raise InvalidStateError("This delivery job has been cancelled.")
    if not agency_covers(agency, job.pickupCity):
        raise ForbiddenError(f"Your agency does not cover pickups from {job.pickupCity}.")

    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=job.order_id)
        now = timezone.now()
        claimed = DeliveryJob.objects.filter(
            pk=job.pk, status=DeliveryJob.OPEN, agency__isnull=True
        ).update(agency=agency, status=DeliveryJob.ACCEPTED, acceptedAt=now)
        if claimed == 0:
            raise ConflictError("This job has already been accepted by another agency.")

        validate_order_transition(order.status, Order.IN_TRANSIT, AGENCY)
        order.status = Order.IN_TRANSIT
        order.inTransitAt = now
        order.save(update_fields=['status', 'inTransitAt'])

        job.refresh_from_db()
        log_job_event(job, 'ACCEPTED', DeliveryJob.OPEN, DeliveryJob.ACCEPTED,
                      'AGENCY', agency.id, agency.name)

    logger.info("Agency %s accepted delivery job %s (order %s)", agency.id, job.id, order.id)
    return job


def mark_job_delivered(user, job_id):
    agency = get_active_agency(user)
    order_id = DeliveryJob.objects.filter(pk=job_id).values_list('order_id', flat=True).first()
    if order_id is None:
        raise NotFoundError("Delivery job not found")

    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=order_id)
        job = DeliveryJob.objects.select_for_update().get(pk=job_id)

        validate_agency_owns_job(job.agency_id, agency.id)
        validate_job_transition(job.status, DeliveryJob.DELIVERED, AGENCY)

        now = timezone.now()
        job.status = DeliveryJob.DELIVERED
        job.deliveredAt = now
        job.save(update_fields=['status', 'deliveredAt'])

        validate_order_transition(order.status, Order.DELIVERED, AGENCY)
        order.status = Order.DELIVERED
        order.deliveredAt = now
        order.save(update_fields=['status', 'deliveredAt'])

        log_job_event(job, 'DELIVERED', DeliveryJob.ACCEPTED, DeliveryJob.DELIVERED,
                      'AGENCY', agency.id, agency.name)

    logger.info("Agency %s delivered job %s (order %s)", agency.id, job.id, order.id)
    return job


def list_my_jobs(user):
    try:
        agency = DeliveryAgency.objects.get(user=user)
    except DeliveryAgency.DoesNotExist:
        raise NotFoundError("Delivery agency profile not found")
    return agency.jobs.select_related('order').order_by('-createdAt')


def _clean_cities(cities):
    cleaned = []
    seen = set()
    for city in cities or []:
        name = ' '.join(str(city).split())
        if name and normalize_city(name) not in seen:
            seen.add(normalize_city(name))
            cleaned.append(name)
    return cleaned


def create_agency(name, phone, password, cities_covered, email=None,
                  fee_same_city=None, fee_other_city=None):
    """Create a delivery agency together with the account it signs in with."""
    phone = normalize_cameroon_phone(phone)
    if CustomUser.objects.filter(phone=phone).exists():
        raise ConflictError("Phone number already registered")
    if email and CustomUser.objects.filter(email=email).exists():
        raise ConflictError("Email already registered")
    cities = _clean_cities(cities_covered)
    if not cities:
        raise ValidationError("An agency must cover at least one city")

    with transaction.atomic():
        user = CustomUser.objects.create_user(
            phone=phone, password=password, email=email or None, name=name, role=CustomUser.AGENCY,
        )
        agency = DeliveryAgency.objects.create(
            user=user,
            name=name,
            phone=phone,
            email=email or None,
            citiesCovered=cities,
            feeSameCity=fee_same_city if fee_same_city is not None else settings.MARKETPLACE['DEFAULT_AGENCY_JOB_FEE'],
            feeOtherCity=fee_other_city if fee_other_city is not None else settings.MARKETPLACE['DEFAULT_AGENCY_JOB_FEE'],
        )
    logger.info("Delivery agency %s created covering %s", agency.id, ', '.join(cities))
    return agency


def update_agency(agency, **changes):
    if 'citiesCovered' in changes:
        changes['citiesCovered'] = _clean_cities(changes['citiesCovered'])
        if not changes['citiesCovered']:
            raise ValidationError("An agency must cover at least one city")
    for field, value in changes.items():
        setattr(agency, field, value)
    agency.save()
    return agency


def set_agency_active(agency_id, active):
    try:
        agency = DeliveryAgency.objects.select_related('user').get(pk=agency_id)
    except DeliveryAgency.DoesNotExist:
        raise NotFoundError("Delivery agency not found")
    agency.isActive = active
    agency.save(update_fields=['isActive'])
    logger.info("Delivery agency %s %s", agency.id, "activated" if active else "deactivated")
    return agency
