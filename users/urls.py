from django.urls import path
from .views import *

urlpatterns = [
    path('', UserManagementView.as_view()),               # GET all users
    path('<int:pk>/', UserManagementView.as_view()),
    path('<int:pk>/suspend/', suspendUser, name='suspendUser'),
    path('<int:pk>/activate/', activateUser, name='activateUser'),
]
