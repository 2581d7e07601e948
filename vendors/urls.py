from django.urls import path
from .views import *

urlpatterns = [
    path('profile/', getVendorProfile, name='get-vendor-profile'),
    path('profile/update/', updateVendorProfile, name='update-vendor-profile'),
    path('orders/', getVendorOrders, name='getVendorOrders'),
    path('orders/<int:orderID>/confirm/', confirmOrder, name='vendor-confirm-order'),
    path('orders/<int:orderID>/in-transit/', markOrderInTransit, name='vendor-order-in-transit'),
    path('orders/<int:orderID>/delivered/', markOrderDelivered, name='vendor-order-delivered'),
    path('orders/<int:orderID>/cancel/', cancelVendorOrder, name='vendor-cancel-order'),
    path('salesSummary/', getVendorSalesSummary, name='vendor-sales-summary'),

    path('admin/all/', getVendors, name='getVendors'),
    path('admin/<int:pk>/', getVendor, name='get-vendor'),
]
