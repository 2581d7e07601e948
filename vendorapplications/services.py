"""
Vendor applications: how a customer account becomes a vendor.

A BUSINESS application needs business details and a taxpayer document and
goes to manual verification. An INDIVIDUAL application needs the details on
the seller's ID plus both sides of the ID and a selfie, and goes to KYC
review. Approval creates an already-verified VendorProfile.
"""
import logging

from django.db import transaction
from django.utils import timezone

from api.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from api.models import CustomUser
from api.phone import normalize_cameroon_phone
from vendors.models import KYC_APPROVED, VendorProfile
from .models import VendorApplication, VendorApplicationDocument

logger = logging.getLogger(__name__)

Doc = VendorApplicationDocument

REQUIRED_DOCUMENTS = {
    VendorApplication.BUSINESS: {Doc.TAXPAYER_DOC},
    VendorApplication.INDIVIDUAL: {Doc.ID_FRONT, Doc.ID_BACK, Doc.SELFIE},
}

LOCKED_STATUSES = (VendorApplication.APPROVED,) + VendorApplication.PENDING_STATUSES


def get_my_application(user):
    return VendorApplication.objects.filter(user=user).prefetch_related('documents').first()


def create_application(user, application_type):
    """Start an application, or return the one already in progress."""
    existing = (
        VendorApplication.objects
        .filter(user=user)
        .exclude(status__in=[VendorApplication.APPROVED, VendorApplication.REJECTED])
        .first()
    )
    if existing:
        if existing.type == application_type:
            return existing, False
        if existing.status == VendorApplication.DRAFT:
            existing.type = application_type
            existing.save(update_fields=['type', 'updatedAt'])
            return existing, False
        raise InvalidStateError("You already have an application in progress")

    application = VendorApplication.objects.create(user=user, type=application_type)
    logger.info("Vendor application %s (%s) started by user %s", application.id, application_type, user.id)
    return application, True


def _editable_application(user, application_id):
    try:
        application = VendorApplication.objects.get(pk=application_id, user=user)
    except VendorApplication.DoesNotExist:
        raise NotFoundError("Application not found")
    if application.status in LOCKED_STATUSES:
        raise ForbiddenError("Application cannot be edited in current status")
    return application


def update_business_details(user, application_id, business_name, business_address, business_phone,
                            business_email=None):
    application = _editable_application(user, application_id)
    if application.type != VendorApplication.BUSINESS:
        raise ValidationError("This is not a business application")

    application.businessName = business_name
    application.businessAddress = business_address
    application.businessPhone = normalize_cameroon_phone(business_phone)
    application.businessEmail = business_email or None
    application.save(update_fields=['businessName', 'businessAddress', 'businessPhone',
                                    'businessEmail', 'updatedAt'])
    return application


def update_individual_details(user, application_id, full_name_on_id, location, phone):
    application = _editable_application(user, application_id)
    if application.type != VendorApplication.INDIVIDUAL:
        raise ValidationError("This is not an individual application")

    application.fullNameOnId = full_name_on_id
    application.location = location
    application.phoneNormalized = normalize_cameroon_phone(phone)
    application.save(update_fields=['fullNameOnId', 'location', 'phoneNormalized', 'updatedAt'])
    return application


def attach_document(user, application_id, kind, document_url):
    """Attach a document URL. A new document of the same kind replaces the old one."""
    application = _editable_application(user, application_id)
    document, created = VendorApplicationDocument.objects.update_or_create(
        application=application, kind=kind, defaults={'documentUrl': document_url},
    )
    logger.info("Application %s: %s %s", application.id, "added" if created else "replaced", kind)
    return document


def _missing_details(application):
    if application.type == VendorApplication.BUSINESS:
        fields = (application.businessName, application.businessAddress, application.businessPhone)
    else:
        fields = (application.fullNameOnId, application.location, application.phoneNormalized)
    return not all(fields)


def submit(user, application_id):
    with transaction.atomic():
        try:
            application = VendorApplication.objects.select_for_update().get(pk=application_id, user=user)
        except VendorApplication.DoesNotExist:
            raise NotFoundError("Application not found")

        if application.status == VendorApplication.APPROVED:
            raise InvalidStateError("Application already approved")
        if application.status in VendorApplication.PENDING_STATUSES:
            raise InvalidStateError("Application is already under review")

        if _missing_details(application):
            if application.type == VendorApplication.BUSINESS:
                raise ValidationError("Missing required business details")
            raise ValidationError("Missing required personal details")

        kinds = set(application.documents.values_list('kind', flat=True))
        if not REQUIRED_DOCUMENTS[application.type] <= kinds:
            if application.type == VendorApplication.BUSINESS:
                raise ValidationError("Taxpayer document is required")
            raise ValidationError("All KYC documents are required (ID front, ID back, selfie)")

        if application.type == VendorApplication.BUSINESS:
            application.status = VendorApplication.PENDING_MANUAL_VERIFICATION
        else:
            application.status = VendorApplication.PENDING_KYC_REVIEW
        application.rejectionReason = None
        application.save(update_fields=['status', 'rejectionReason', 'updatedAt'])

    logger.info("Vendor application %s submitted (%s)", application.id, application.status)
    return application


def list_applications(status=None):
    applications = VendorApplication.objects.select_related('user').prefetch_related('documents')
    if status:
        return applications.filter(status=status)
    return applications.filter(status__in=VendorApplication.PENDING_STATUSES)


def _lock_pending(application_id):
    try:
        application = VendorApplication.objects.select_for_update().select_related('user').get(pk=application_id)
    except VendorApplication.DoesNotExist:
        raise NotFoundError("Application not found")
    if application.status not in VendorApplication.PENDING_STATUSES:
        raise InvalidStateError(f"Application is {application.status} and cannot be reviewed")
    return application


def approve(application_id, admin):
    with transaction.atomic():
        application = _lock_pending(application_id)
        applicant = application.user
        if applicant.role != CustomUser.CUSTOMER:
            raise InvalidStateError("Only customer accounts can become vendors")

        application.status = VendorApplication.APPROVED
        application.reviewedBy = admin
        application.reviewedAt = timezone.now()
        application.save(update_fields=['status', 'reviewedBy', 'reviewedAt', 'updatedAt'])

        if application.type == VendorApplication.BUSINESS:
            name, address, city = application.businessName, application.businessAddress, ''
        else:
            name, address, city = application.fullNameOnId, application.location, application.location
        VendorProfile.objects.create(
            user=applicant,
            businessName=name,
            businessAddress=address,
            city=city,
            kycStatus=KYC_APPROVED,
        )
        applicant.role = CustomUser.VENDOR
        applicant.save(update_fields=['role'])

    logger.info("Vendor application %s approved by admin %s", application.id, admin.id)
    return application


def reject(application_id, admin, reason):
    if not reason or not str(reason).strip():
        raise ValidationError("A rejection reason is required")

    with transaction.atomic():
        application = _lock_pending(application_id)
        application.status = VendorApplication.REJECTED
        application.rejectionReason = str(reason).strip()
        application.reviewedBy = admin
        application.reviewedAt = timezone.now()
        application.save(update_fields=['status', 'rejectionReason', 'reviewedBy', 'reviewedAt', 'updatedAt'])

    logger.info("Vendor application %s rejected by admin %s", application.id, admin.id)
    return application
