from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from api.exceptions import NotFoundError, ValidationError
from api.pagination import paginate
from api.permissions import IsAdmin, IsAgency
from . import services
from .models import DeliveryAgency, DeliveryJob
from .quote import calculate_quote
from .serializers import (
    CreateAgencySerializer,
    DeliveryAgencySerializer,
    DeliveryJobDetailSerializer,
    DeliveryJobSerializer,
)


@api_view(['GET'])
@permission_classes([AllowAny])
def getDeliveryQuote(request):
    pickup_city = (request.query_params.get('pickupCity') or '').strip()
    dropoff_city = (request.query_params.get('dropoffCity') or '').strip()
    if not pickup_city or not dropoff_city:
        raise ValidationError("pickupCity and dropoffCity are required")
    return Response(calculate_quote(pickup_city, dropoff_city))


# ---------------------------------------------------
# Agency
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAgency])
def getAvailableJobs(request):
    jobs = services.list_available_jobs(request.user)
    return Response({
        "message": "Available jobs fetched successfully",
        "data": DeliveryJobSerializer(jobs, many=True).data
    })


@api_view(['POST'])
@permission_classes([IsAgency])
def acceptJob(request, jobID):
    job = services.accept_job(request.user, jobID)
    return Response({"message": "Job accepted", "data": DeliveryJobSerializer(job).data})


@api_view(['POST'])
@permission_classes([IsAgency])
def deliverJob(request, jobID):
    job = services.mark_job_delivered(request.user, jobID)
    return Response({"message": "Job marked as delivered", "data": DeliveryJobSerializer(job).data})


@api_view(['GET'])
@permission_classes([IsAgency])
def getMyJobs(request):
    jobs = services.list_my_jobs(request.user)
    status_filter = request.query_params.get('status')
    if status_filter:
        jobs = jobs.filter(status=status_filter)
    return paginate(request, jobs, DeliveryJobSerializer)


def _agency_for(user):
    try:
        return DeliveryAgency.objects.get(user=user)
    except DeliveryAgency.DoesNotExist:
        raise NotFoundError("Delivery agency profile not found")


@api_view(['GET'])
@permission_classes([IsAgency])
def getAgencyProfile(request):
    agency = _agency_for(request.user)
    return Response({"message": "Agency profile fetched successfully", "data": DeliveryAgencySerializer(agency).data})


@api_view(['PUT', 'PATCH'])
@permission_classes([IsAgency])
def updateAgencyProfile(request):
    agency = _agency_for(request.user)
    serializer = DeliveryAgencySerializer(agency, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    agency = services.update_agency(agency, **serializer.validated_data)
    return Response({"message": "Agency profile updated successfully", "data": DeliveryAgencySerializer(agency).data})


# ---------------------------------------------------
# Admin
# ---------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAdmin])
def createAgency(request):
    serializer = CreateAgencySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    agency = services.create_agency(
        name=data['name'],
        phone=data['phone'],
        password=data['password'],
        cities_covered=data['citiesCovered'],
        email=data.get('email'),
        fee_same_city=data.get('feeSameCity'),
        fee_other_city=data.get('feeOtherCity'),
    )
    return Response({
        "message": "Delivery agency created successfully",
        "data": DeliveryAgencySerializer(agency).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAdmin])
def getAgencies(request):
    agencies = DeliveryAgency.objects.order_by('name')
    active = request.query_params.get('isActive')
    if active in ('true', 'false'):
        agencies = agencies.filter(isActive=active == 'true')
    return paginate(request, agencies, DeliveryAgencySerializer)


@api_view(['PUT', 'PATCH'])
@permission_classes([IsAdmin])
def updateAgency(request, pk):
    try:
        agency = DeliveryAgency.objects.get(pk=pk)
    except DeliveryAgency.DoesNotExist:
        raise NotFoundError("Delivery agency not found")
    serializer = DeliveryAgencySerializer(agency, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    agency = services.update_agency(agency, **serializer.validated_data)
    return Response({"message": "Delivery agency updated successfully", "data": DeliveryAgencySerializer(agency).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def activateAgency(request, pk):
    agency = services.set_agency_active(pk, True)
    return Response({"message": "Delivery agency activated", "data": DeliveryAgencySerializer(agency).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def deactivateAgency(request, pk):
    agency = services.set_agency_active(pk, False)
    return Response({"message": "Delivery agency deactivated", "data": DeliveryAgencySerializer(agency).data})


@api_view(['GET'])
@permission_classes([IsAdmin])
def getAllJobs(request):
    jobs = DeliveryJob.objects.select_related('order', 'agency').order_by('-createdAt')
    status_filter = request.query_params.get('status')
    if status_filter:
        jobs = jobs.filter(status=status_filter)
    return paginate(request, jobs, DeliveryJobSerializer)


@api_view(['GET'])
@permission_classes([IsAdmin])
def getJob(request, jobID):
    try:
        job = DeliveryJob.objects.select_related('order', 'agency').prefetch_related('logs').get(pk=jobID)
    except DeliveryJob.DoesNotExist:
        raise NotFoundError("Delivery job not found")
    return Response({"message": "Delivery job fetched successfully", "data": DeliveryJobDetailSerializer(job).data})
