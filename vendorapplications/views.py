from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.pagination import paginate
from api.permissions import IsAdmin, IsCustomer
from . import services
from .serializers import (
    BusinessDetailsSerializer,
    CreateApplicationSerializer,
    DocumentSerializer,
    IndividualDetailsSerializer,
    VendorApplicationDocumentSerializer,
    VendorApplicationSerializer,
)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def getMyApplication(request):
    application = services.get_my_application(request.user)
    return Response({"data": VendorApplicationSerializer(application).data if application else None})


@api_view(['POST'])
@permission_classes([IsCustomer])
def createApplication(request):
    serializer = CreateApplicationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    application, created = services.create_application(request.user, serializer.validated_data['type'])
    return Response({
        "message": "Application created" if created else "Application in progress",
        "data": VendorApplicationSerializer(application).data
    }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@api_view(['PUT'])
@permission_classes([IsCustomer])
def updateBusinessDetails(request, applicationID):
    serializer = BusinessDetailsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    application = services.update_business_details(
        request.user, applicationID,
        data['businessName'], data['businessAddress'], data['businessPhone'], data.get('businessEmail'),
    )
    return Response({"message": "Business details saved", "data": VendorApplicationSerializer(application).data})


@api_view(['PUT'])
@permission_classes([IsCustomer])
def updateIndividualDetails(request, applicationID):
    serializer = IndividualDetailsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    application = services.update_individual_details(
        request.user, applicationID, data['fullNameOnId'], data['location'], data['phone'],
    )
    return Response({"message": "Personal details saved", "data": VendorApplicationSerializer(application).data})


@api_view(['POST'])
@permission_classes([IsCustomer])
def attachDocument(request, applicationID):
    serializer = DocumentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    document = services.attach_document(
        request.user, applicationID, serializer.validated_data['kind'], serializer.validated_data['documentUrl'],
    )
    return Response({
        "message": "Document saved",
        "data": VendorApplicationDocumentSerializer(document).data
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsCustomer])
def submitApplication(request, applicationID):
    application = services.submit(request.user, applicationID)
    return Response({"message": "Application submitted for review", "data": VendorApplicationSerializer(application).data})


# ---------------------------------------------------
# Admin
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAdmin])
def getApplications(request):
    applications = services.list_applications(request.query_params.get('status'))
    return paginate(request, applications, VendorApplicationSerializer)


@api_view(['POST'])
@permission_classes([IsAdmin])
def approveApplication(request, applicationID):
    application = services.approve(applicationID, request.user)
    return Response({"message": "Application approved successfully", "data": VendorApplicationSerializer(application).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def rejectApplication(request, applicationID):
    application = services.reject(applicationID, request.user, request.data.get('reason'))
    return Response({"message": "Application rejected", "data": VendorApplicationSerializer(application).data})
