from django.urls import path
from .views import *

urlpatterns = [
    path('', getPayments, name="getPayments"),
    path('<int:paymentID>/confirm/', confirmPayment, name="confirmPayment"),
    path('<int:paymentID>/fail/', failPayment, name="failPayment"),
]
