from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.pagination import paginate
from api.permissions import IsAdmin
from . import services
from .serializers import KycSubmissionSerializer, MyKycSerializer, SubmitKycSerializer


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submitKyc(request):
    serializer = SubmitKycSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    submission = services.submit(
        request.user, data['documentType'], data['documentUrl'], data.get('selfieUrl')
    )
    return Response({
        "message": "KYC submitted for review",
        "data": KycSubmissionSerializer(submission).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def getMyKyc(request):
    return Response(MyKycSerializer(services.get_my_kyc(request.user)).data)


# ---------------------------------------------------
# Admin
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAdmin])
def getSubmissions(request):
    submissions = services.list_submissions(request.query_params.get('status'))
    return paginate(request, submissions, KycSubmissionSerializer)


@api_view(['POST'])
@permission_classes([IsAdmin])
def approveSubmission(request, submissionID):
    submission = services.approve(submissionID, request.user, request.data.get('notes'))
    return Response({"message": "KYC approved", "data": KycSubmissionSerializer(submission).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def rejectSubmission(request, submissionID):
    submission = services.reject(submissionID, request.user, request.data.get('reason'))
    return Response({"message": "KYC rejected", "data": KycSubmissionSerializer(submission).data})
