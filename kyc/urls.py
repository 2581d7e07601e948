from django.urls import path
from .views import *

urlpatterns = [
    path('submit/', submitKyc, name='submitKyc'),
    path('me/', getMyKyc, name='getMyKyc'),

    path('admin/submissions/', getSubmissions, name='getSubmissions'),
    path('admin/submissions/<int:submissionID>/approve/', approveSubmission, name='approveSubmission'),
    path('admin/submissions/<int:submissionID>/reject/', rejectSubmission, name='rejectSubmission'),
]
