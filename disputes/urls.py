from django.urls import path
from .views import *

urlpatterns = [
    path('', getMyDisputes, name='getMyDisputes'),
    path('create/', createDispute, name='createDispute'),

    path('admin/all/', adminGetDisputes, name='adminGetDisputes'),
    path('admin/<int:disputeID>/resolve/', resolveDispute, name='resolveDispute'),
    path('admin/<int:disputeID>/reject/', rejectDispute, name='rejectDispute'),
]
