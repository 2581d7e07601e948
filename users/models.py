from django.db import models
from api.models import CustomUser
from vendors.models import KYC_STATUS_CHOICES, KYC_NOT_SUBMITTED


class RiderProfile(models.Model):
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name="rider")
    city = models.CharField(max_length=100)
    vehicleType = models.CharField(max_length=50, blank=True, default='')
    kycStatus = models.CharField(max_length=20, choices=KYC_STATUS_CHOICES, default=KYC_NOT_SUBMITTED)
    createdAt = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Rider {self.user.phone} ({self.city})"
