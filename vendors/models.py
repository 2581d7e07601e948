from django.db import models
from api.models import CustomUser


KYC_NOT_SUBMITTED = 'NOT_SUBMITTED'
KYC_PENDING = 'PENDING'
KYC_APPROVED = 'APPROVED'
KYC_REJECTED = 'REJECTED'

KYC_STATUS_CHOICES = (
    (KYC_NOT_SUBMITTED, 'Not submitted'),
    (KYC_PENDING, 'Pending'),
    (KYC_APPROVED, 'Approved'),
    (KYC_REJECTED, 'Rejected'),
)


class VendorProfile(models.Model):
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name="vendor")
    businessName = models.CharField(max_length=255)
    businessAddress = models.TextField()
    city = models.CharField(max_length=100, blank=True, default='')
    kycStatus = models.CharField(max_length=20, choices=KYC_STATUS_CHOICES, default=KYC_NOT_SUBMITTED)
    createdAt = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.businessName} ({self.user.phone})"
