from django.db import models
from api.models import CustomUser
from orders.models import Order


class Dispute(models.Model):
    OPEN = 'OPEN'
    RESOLVED = 'RESOLVED'
    REJECTED = 'REJECTED'
    STATUS_CHOICES = (
        (OPEN, 'Open'),
        (RESOLVED, 'Resolved'),
        (REJECTED, 'Rejected'),
    )

    order = models.OneToOneField(Order, on_delete=models.CASCADE, related_name='dispute')
    customer = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='disputes')
    reason = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=OPEN)
    resolution = models.TextField(blank=True, null=True)
    resolvedAt = models.DateTimeField(null=True, blank=True)
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-createdAt', '-id']

    def __str__(self):
        return f"Dispute {self.id} on order {self.order_id} - {self.status}"
