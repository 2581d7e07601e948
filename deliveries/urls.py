from django.urls import path
from .views import *

urlpatterns = [
    path('quote/', getDeliveryQuote, name='getDeliveryQuote'),

    # Agency
    path('jobs/available/', getAvailableJobs, name='getAvailableJobs'),
    path('jobs/mine/', getMyJobs, name='getMyJobs'),
    path('jobs/<int:jobID>/accept/', acceptJob, name='acceptJob'),
    path('jobs/<int:jobID>/deliver/', deliverJob, name='deliverJob'),
    path('agency/profile/', getAgencyProfile, name='getAgencyProfile'),
    path('agency/profile/update/', updateAgencyProfile, name='updateAgencyProfile'),

    # Admin
    path('admin/agencies/', getAgencies, name='getAgencies'),
    path('admin/agencies/create/', createAgency, name='createAgency'),
    path('admin/agencies/<int:pk>/update/', updateAgency, name='updateAgency'),
    path('admin/agencies/<int:pk>/activate/', activateAgency, name='activateAgency'),
    path('admin/agencies/<int:pk>/deactivate/', deactivateAgency, name='deactivateAgency'),
    path('admin/jobs/', getAllJobs, name='getAllJobs'),
    path('admin/jobs/<int:jobID>/', getJob, name='getJob'),
]
