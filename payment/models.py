from django.db import models
from orders.models import Order


class Payment(models.Model):
    INITIATED = 'INITIATED'
    SUCCESS = 'SUCCESS'
    FAILED = 'FAILED'
    REFUNDED = 'REFUNDED'
    STATUS_CHOICES = (
        (INITIATED, 'Initiated'),
        (SUCCESS, 'Success'),
        (FAILED, 'Failed'),
        (REFUNDED, 'Refunded'),
    )

    order = models.OneToOneField(Order, on_delete=models.CASCADE, related_name='payment')
    amount = models.PositiveIntegerField()
    paymentMethod = models.CharField(max_length=20, choices=Order.PAYMENT_METHOD_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=INITIATED)
    transactionId = models.CharField(max_length=100, blank=True, null=True)
    paidAt = models.DateTimeField(null=True, blank=True)
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-createdAt']

    def __str__(self):
        return f"Payment {self.id} for order {self.order_id} - {self.status}"
