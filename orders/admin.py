from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'productName', 'unitPrice', 'quantity')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer', 'vendor', 'status', 'totalAmount', 'paymentMethod', 'deliveryMethod', 'createdAt')
    list_filter = ('status', 'paymentMethod', 'deliveryMethod')
    search_fields = ('customer__phone', 'vendor__businessName', 'deliveryCity')
    inlines = [OrderItemInline]
