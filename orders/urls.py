from django.urls import path
from .views import *

urlpatterns = [
    path('', getOrders, name="getOrders"),
    path('create/', createOrder, name="createOrder"),
    path('<int:orderID>/', getOrder, name='getOrder'),
    path('<int:orderID>/complete/', completeOrder, name='completeOrder'),
    path('<int:orderID>/cancel/', cancelOrder, name='cancelOrder'),
    path('<int:orderID>/receipt/', downloadReceipt, name='downloadReceipt'),

    path('admin/all/', adminListOrders, name='adminListOrders'),
    path('admin/<int:orderID>/status/', adminUpdateOrderStatus, name='adminUpdateOrderStatus'),
]
