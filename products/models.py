from django.db import models
from vendors.models import VendorProfile
from django.utils.text import slugify

# Category model
class Category(models.Model):
    name = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(blank=True, null=True, unique=True)      # slug field for SEO-friendly URLs in frontend
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        related_name='subcategories',
        blank=True,
        null=True
    )

    class Meta:
        verbose_name_plural = 'categories'

    def save(self, *args, **kwargs):
        if not self.slug:
            base_slug = slugify(self.name)
            unique_slug = base_slug
            counter = 1
            while Category.objects.filter(slug=unique_slug).exclude(pk=self.pk).exists():
                unique_slug = f"{base_slug}-{counter}"
                counter += 1
            self.slug = unique_slug
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name if not self.parent else f"{self.parent.name} -> {self.name}"


# Product model
class Product(models.Model):
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    STATUS_CHOICES = (
        (PENDING, 'Pending review'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    )

    VENDOR_DELIVERY = 'VENDOR_DELIVERY'
    JEMO_RIDER = 'JEMO_RIDER'
    DELIVERY_TYPE_CHOICES = (
        (VENDOR_DELIVERY, 'Vendor delivery'),
        (JEMO_RIDER, 'Platform delivery'),
    )

    TODAYS_DEAL = 'TODAYS_DEAL'
    FLASH_SALE = 'FLASH_SALE'
    DEAL_TYPE_CHOICES = (
        (TODAYS_DEAL, "Today's deal"),
        (FLASH_SALE, 'Flash sale'),
    )

    vendor = models.ForeignKey(VendorProfile, on_delete=models.CASCADE, related_name='products')
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, related_name='products', null=True, blank=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')

    # Prices in XAF
    price = models.PositiveIntegerField()
    discountPrice = models.PositiveIntegerField(null=True, blank=True)
    stock = models.PositiveIntegerField(default=0)
    city = models.CharField(max_length=100)
    images = models.JSONField(default=list, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    rejectionReason = models.TextField(blank=True, null=True)

    dealType = models.CharField(max_length=20, choices=DEAL_TYPE_CHOICES, null=True, blank=True)
    flashSaleEndsAt = models.DateTimeField(null=True, blank=True)

    # Delivery configuration
    deliveryType = models.CharField(max_length=20, choices=DELIVERY_TYPE_CHOICES, default=VENDOR_DELIVERY)
    freeDelivery = models.BooleanField(default=False)
    flatDeliveryFee = models.PositiveIntegerField(null=True, blank=True)
    sameCityDeliveryFee = models.PositiveIntegerField(null=True, blank=True)
    otherCityDeliveryFee = models.PositiveIntegerField(null=True, blank=True)
    pickupAvailable = models.BooleanField(default=False)
    localDelivery = models.BooleanField(default=True)
    nationwideDelivery = models.BooleanField(default=False)

    createdAt = models.DateTimeField(auto_now_add=True)
    updatedAt = models.DateTimeField(auto_now=True)

    @property
    def effectivePrice(self):
        if self.discountPrice is not None and self.discountPrice < self.price:
            return self.discountPrice
        return self.price

    def __str__(self):
        return f"{self.name} ({self.vendor.businessName})"
