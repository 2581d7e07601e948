from django.contrib import admin
from .models import DeliveryAgency, DeliveryJob


@admin.register(DeliveryAgency)
class DeliveryAgencyAdmin(admin.ModelAdmin):
    list_display = ('name', 'phone', 'isActive', 'feeSameCity', 'feeOtherCity', 'createdAt')
    list_filter = ('isActive',)
    search_fields = ('name', 'phone')


@admin.register(DeliveryJob)
class DeliveryJobAdmin(admin.ModelAdmin):
    list_display = ('id', 'order', 'agency', 'status', 'pickupCity', 'dropoffCity', 'fee', 'createdAt')
    list_filter = ('status',)
    search_fields = ('pickupCity', 'dropoffCity', 'agency__name')
