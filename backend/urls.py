"""
URL configuration for backend project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include

from adminsettings.views import getPublicDeliveryPricing

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('auth/', include('api.urls')),
    path('products/', include('products.urls')),
    path('favorites/', include('favorites.urls')),
    path('orders/', include('orders.urls')),
    path('vendor/', include('vendors.urls')),
    path('delivery/pricing/', getPublicDeliveryPricing, name='getPublicDeliveryPricing'),
    path('delivery/', include('deliveries.urls')),
    path('payments/', include('payment.urls')),
    path('wallet/', include('wallet.urls')),
    path('kyc/', include('kyc.urls')),
    path('vendor-applications/', include('vendorapplications.urls')),
    path('chat/', include('chat.urls')),
    path('disputes/', include('disputes.urls')),
    path('admin/users/', include('users.urls')),
    path('admin/settings/', include('adminsettings.urls')),
    path('health/', include('health.urls')),
]
