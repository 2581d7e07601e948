from django.db import models
from api.models import CustomUser


class VendorApplication(models.Model):
    BUSINESS = 'BUSINESS'
    INDIVIDUAL = 'INDIVIDUAL'
    TYPE_CHOICES = (
        (BUSINESS, 'Registered business'),
        (INDIVIDUAL, 'Individual seller'),
    )

    DRAFT = 'DRAFT'
    PENDING_MANUAL_VERIFICATION = 'PENDING_MANUAL_VERIFICATION'
    PENDING_KYC_REVIEW = 'PENDING_KYC_REVIEW'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    STATUS_CHOICES = (
        (DRAFT, 'Draft'),
        (PENDING_MANUAL_VERIFICATION, 'Pending manual verification'),
        (PENDING_KYC_REVIEW, 'Pending KYC review'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    )
    PENDING_STATUSES = (PENDING_MANUAL_VERIFICATION, PENDING_KYC_REVIEW)

    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='vendorApplications')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=40, choices=STATUS_CHOICES, default=DRAFT)

    # BUSINESS path
    businessName = models.CharField(max_length=255, blank=True, default='')
    businessAddress = models.TextField(blank=True, default='')
    businessPhone = models.CharField(max_length=20, blank=True, default='')
    businessEmail = models.EmailField(blank=True, null=True)

    # INDIVIDUAL path
    fullNameOnId = models.CharField(max_length=255, blank=True, default='')
    location = models.CharField(max_length=255, blank=True, default='')
    phoneNormalized = models.CharField(max_length=20, blank=True, default='')

    rejectionReason = models.TextField(blank=True, null=True)
    reviewedBy = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, related_name='vendorApplicationReviews', null=True, blank=True
    )
    reviewedAt = models.DateTimeField(null=True, blank=True)
    createdAt = models.DateTimeField(auto_now_add=True)
    updatedAt = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-createdAt', '-id']

    def __str__(self):
        return f"{self.type} application {self.id} for {self.user.phone} - {self.status}"


class VendorApplicationDocument(models.Model):
    TAXPAYER_DOC = 'TAXPAYER_DOC'
    ID_FRONT = 'ID_FRONT'
    ID_BACK = 'ID_BACK'
    SELFIE = 'SELFIE'
    KIND_CHOICES = (
        (TAXPAYER_DOC, 'Taxpayer document'),
        (ID_FRONT, 'ID card front'),
        (ID_BACK, 'ID card back'),
        (SELFIE, 'Selfie'),
    )

    application = models.ForeignKey(VendorApplication, on_delete=models.CASCADE, related_name='documents')
    kind = models.CharField(max_length=20, choices=KIND_CHOICES)
    documentUrl = models.URLField(max_length=500)
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['kind']
        constraints = [
            models.UniqueConstraint(fields=['application', 'kind'], name='unique_document_kind_per_application'),
        ]

    def __str__(self):
        return f"{self.kind} for application {self.application_id}"
