"""
KYC submissions for vendors and riders.

The profile's kycStatus mirrors the latest submission and is written in the
same transaction as the submission itself.
"""
import logging

from django.db import transaction
from django.utils import timezone

from api.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from api.models import CustomUser
from users.models import RiderProfile
from vendors.models import KYC_APPROVED, KYC_PENDING, KYC_REJECTED, VendorProfile
from .models import KycSubmission

logger = logging.getLogger(__name__)


def _profile_for(user):
    """Return (field name, profile) for the user's KYC-bearing profile."""
    if user.role == CustomUser.VENDOR:
        try:
            return 'vendorProfile', VendorProfile.objects.get(user=user)
        except VendorProfile.DoesNotExist:
            raise NotFoundError("Vendor profile not found")
    if user.role == CustomUser.RIDER:
        try:
            return 'riderProfile', RiderProfile.objects.get(user=user)
        except RiderProfile.DoesNotExist:
            raise NotFoundError("Rider profile not found")
    raise ValidationError("Only vendors and riders can submit KYC")


def submit(user, document_type, document_url, selfie_url=None):
    field, profile = _profile_for(user)
    if document_type not in dict(KycSubmission.DOCUMENT_TYPE_CHOICES):
        raise ValidationError("Invalid document type")
    if not document_url:
        raise ValidationError("Document URL is required")

    with transaction.atomic():
        profile = type(profile).objects.select_for_update().get(pk=profile.pk)
        if profile.kycStatus == KYC_APPROVED:
            raise ValidationError("KYC is already approved")
        if KycSubmission.objects.filter(**{field: profile}, status=KycSubmission.PENDING).exists():
            raise ConflictError("A KYC submission is already pending review")

        submission = KycSubmission.objects.create(
            user=user,
            documentType=document_type,
            documentUrl=document_url,
            selfieUrl=selfie_url or None,
            **{field: profile},
        )
        profile.kycStatus = KYC_PENDING
        profile.save(update_fields=['kycStatus'])

    logger.info("KYC submission %s created by %s %s", submission.id, user.role, user.id)
    return submission


def get_my_kyc(user):
    if user.role not in (CustomUser.VENDOR, CustomUser.RIDER):
        raise ValidationError("Only vendors and riders have KYC")
    field, profile = _profile_for(user)
    latest = KycSubmission.objects.filter(**{field: profile}).first()
    return {'kycStatus': profile.kycStatus, 'latestSubmission': latest}


def list_submissions(status=None):
    submissions = KycSubmission.objects.select_related('user', 'vendorProfile', 'riderProfile')
    if status:
        submissions = submissions.filter(status=status)
    return submissions


def _lock_pending(submission_id):
    try:
        submission = KycSubmission.objects.select_for_update().get(pk=submission_id)
    except KycSubmission.DoesNotExist:
        raise NotFoundError("KYC submission not found")
    if submission.status != KycSubmission.PENDING:
        raise InvalidStateError(f"KYC submission is already {submission.status}")
    return submission


def _review(submission, status, admin, notes):
    submission.status = status
    submission.reviewNotes = notes
    submission.reviewedBy = admin
    submission.reviewedAt = timezone.now()
    submission.save(update_fields=['status', 'reviewNotes', 'reviewedBy', 'reviewedAt'])

    profile = submission.profile
    if profile is not None:
        profile.kycStatus = status
        profile.save(update_fields=['kycStatus'])


def approve(submission_id, admin, notes=None):
    with transaction.atomic():
        submission = _lock_pending(submission_id)
        _review(submission, KYC_APPROVED, admin, notes or None)
    logger.info("KYC submission %s approved by admin %s", submission.id, admin.id)
    return submission


def reject(submission_id, admin, reason):
    # Checked before any row is touched
    if not reason or not str(reason).strip():
        raise ValidationError("A rejection reason is required")

    with transaction.atomic():
        submission = _lock_pending(submission_id)
        _review(submission, KYC_REJECTED, admin, str(reason).strip())
    logger.info("KYC submission %s rejected by admin %s", submission.id, admin.id)
    return submission
