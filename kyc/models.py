from django.db import models
from api.models import CustomUser
from users.models import RiderProfile
from vendors.models import VendorProfile


class KycSubmission(models.Model):
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    STATUS_CHOICES = (
        (PENDING, 'Pending'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    )

    NATIONAL_ID = 'NATIONAL_ID'
    PASSPORT = 'PASSPORT'
    DRIVERS_LICENSE = 'DRIVERS_LICENSE'
    BUSINESS_REGISTRATION = 'BUSINESS_REGISTRATION'
    DOCUMENT_TYPE_CHOICES = (
        (NATIONAL_ID, 'National ID card'),
        (PASSPORT, 'Passport'),
        (DRIVERS_LICENSE, "Driver's license"),
        (BUSINESS_REGISTRATION, 'Business registration'),
    )

    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='kycSubmissions')
    vendorProfile = models.ForeignKey(
        VendorProfile, on_delete=models.CASCADE, related_name='kycSubmissions', null=True, blank=True
    )
    riderProfile = models.ForeignKey(
        RiderProfile, on_delete=models.CASCADE, related_name='kycSubmissions', null=True, blank=True
    )
    documentType = models.CharField(max_length=30, choices=DOCUMENT_TYPE_CHOICES)
    documentUrl = models.URLField(max_length=500)
    selfieUrl = models.URLField(max_length=500, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    reviewNotes = models.TextField(blank=True, null=True)
    reviewedBy = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, related_name='kycReviews', null=True, blank=True
    )
    reviewedAt = models.DateTimeField(null=True, blank=True)
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-createdAt', '-id']

    @property
    def profile(self):
        return self.vendorProfile or self.riderProfile

    def __str__(self):
        return f"KYC {self.id} for {self.user.phone} - {self.status}"
