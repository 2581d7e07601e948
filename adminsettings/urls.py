from django.urls import path
from .views import *

urlpatterns = [
    path('', getSettings, name='getSettings'),
    path('delivery-pricing/', deliveryPricing, name='deliveryPricing'),
    path('min-withdrawal/', minWithdrawal, name='minWithdrawal'),
    path('dashboard/', getDashboardStats, name='getDashboardStats'),
]
