from django.urls import path
from .views import *

urlpatterns = [
    path('', createApplication, name='createApplication'),
    path('me/', getMyApplication, name='getMyApplication'),
    path('<int:applicationID>/business-details/', updateBusinessDetails, name='updateBusinessDetails'),
    path('<int:applicationID>/individual-details/', updateIndividualDetails, name='updateIndividualDetails'),
    path('<int:applicationID>/documents/', attachDocument, name='attachDocument'),
    path('<int:applicationID>/submit/', submitApplication, name='submitApplication'),

    path('admin/', getApplications, name='getApplications'),
    path('admin/<int:applicationID>/approve/', approveApplication, name='approveApplication'),
    path('admin/<int:applicationID>/reject/', rejectApplication, name='rejectApplication'),
]
