from django.db import models
from api.models import CustomUser


class DeliveryAgency(models.Model):
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name="agency")
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=13)
    email = models.EmailField(blank=True, null=True)
    citiesCovered = models.JSONField(default=list)
    isActive = models.BooleanField(default=True)
    feeSameCity = models.PositiveIntegerField(default=1500)
    feeOtherCity = models.PositiveIntegerField(default=2000)
    currency = models.CharField(max_length=3, default='XAF')
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'delivery agencies'

    def __str__(self):
        return self.name


class DeliveryJob(models.Model):
    OPEN = 'OPEN'
    ACCEPTED = 'ACCEPTED'
    DELIVERED = 'DELIVERED'
    CANCELLED = 'CANCELLED'
    STATUS_CHOICES = (
        (OPEN, 'Open'),
        (ACCEPTED, 'Accepted'),
        (DELIVERED, 'Delivered'),
        (CANCELLED, 'Cancelled'),
    )

    order = models.OneToOneField('orders.Order', on_delete=models.CASCADE, related_name='deliveryJob')
    agency = models.ForeignKey(DeliveryAgency, on_delete=models.SET_NULL, related_name='jobs', null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=OPEN)
    pickupAddress = models.TextField(blank=True, default='')
    pickupCity = models.CharField(max_length=100)
    dropoffAddress = models.TextField(blank=True, default='')
    dropoffCity = models.CharField(max_length=100)
    fee = models.PositiveIntegerField(default=0)
    acceptedAt = models.DateTimeField(null=True, blank=True)
    deliveredAt = models.DateTimeField(null=True, blank=True)
    cancelledAt = models.DateTimeField(null=True, blank=True)
    createdAt = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Job {self.id} for order {self.order_id} - {self.status}"


class DeliveryJobLog(models.Model):
    job = models.ForeignKey(DeliveryJob, on_delete=models.CASCADE, related_name='logs')
    event = models.CharField(max_length=50)
    previousStatus = models.CharField(max_length=20, blank=True, null=True)
    newStatus = models.CharField(max_length=20)
    actorType = models.CharField(max_length=20)
    actorId = models.CharField(max_length=50, blank=True, null=True)
    actorName = models.CharField(max_length=255, blank=True, default='')
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['createdAt']

    def __str__(self):
        return f"{self.event} ({self.previousStatus} -> {self.newStatus})"
