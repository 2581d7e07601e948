from django.urls import path
from .views import *

urlpatterns = [
    path('', healthCheck, name='healthCheck'),
    path('db/', databaseHealthCheck, name='databaseHealthCheck'),
]
