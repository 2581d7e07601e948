from django.db import models
from api.models import CustomUser
from products.models import Product
from vendors.models import VendorProfile


class Order(models.Model):
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    IN_TRANSIT = 'IN_TRANSIT'
    DELIVERED = 'DELIVERED'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'
    STATUS_CHOICES = (
        (PENDING, 'Pending'),
        (CONFIRMED, 'Confirmed'),
        (IN_TRANSIT, 'In transit'),
        (DELIVERED, 'Delivered'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    )

    COD = 'COD'
    MTN_MOBILE_MONEY = 'MTN_MOBILE_MONEY'
    ORANGE_MONEY = 'ORANGE_MONEY'
    PAYMENT_METHOD_CHOICES = (
        (COD, 'Cash on delivery'),
        (MTN_MOBILE_MONEY, 'MTN Mobile Money'),
        (ORANGE_MONEY, 'Orange Money'),
    )

    customer = models.ForeignKey(CustomUser, on_delete=models.PROTECT, related_name='orders')
    vendor = models.ForeignKey(VendorProfile, on_delete=models.PROTECT, related_name='orders')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)

    # Amounts in XAF
    subtotal = models.PositiveIntegerField()
    deliveryFee = models.PositiveIntegerField(default=0)
    totalAmount = models.PositiveIntegerField()

    deliveryMethod = models.CharField(max_length=20, choices=Product.DELIVERY_TYPE_CHOICES)
    deliveryFeeType = models.CharField(max_length=20)
    deliveryFeeAgency = models.ForeignKey(
        'deliveries.DeliveryAgency', on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    deliveryFeeRule = models.CharField(max_length=20, blank=True, null=True)
    deliveryAddress = models.TextField()
    deliveryCity = models.CharField(max_length=100)
    deliveryPhone = models.CharField(max_length=13)

    paymentMethod = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default=COD)

    createdAt = models.DateTimeField(auto_now_add=True)
    confirmedAt = models.DateTimeField(null=True, blank=True)
    inTransitAt = models.DateTimeField(null=True, blank=True)
    deliveredAt = models.DateTimeField(null=True, blank=True)
    completedAt = models.DateTimeField(null=True, blank=True)

    cancelledAt = models.DateTimeField(null=True, blank=True)
    cancelledBy = models.CharField(max_length=20, blank=True, null=True)
    cancelReason = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-createdAt']

    def __str__(self):
        return f"Order {self.id} - {self.status}"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='orderItems')
    productName = models.CharField(max_length=255)
    unitPrice = models.PositiveIntegerField()
    quantity = models.PositiveIntegerField()

    @property
    def lineTotal(self):
        return self.unitPrice * self.quantity

    def __str__(self):
        return f"{self.quantity} x {self.productName}"
