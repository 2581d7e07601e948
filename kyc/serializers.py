from rest_framework import serializers
from .models import KycSubmission


class KycSubmissionSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(source='user.phone', read_only=True)
    name = serializers.CharField(source='user.name', read_only=True)
    role = serializers.CharField(source='user.role', read_only=True)

    class Meta:
        model = KycSubmission
        fields = ['id', 'user', 'phone', 'name', 'role', 'vendorProfile', 'riderProfile',
                  'documentType', 'documentUrl', 'selfieUrl', 'status',
                  'reviewNotes', 'reviewedBy', 'reviewedAt', 'createdAt']
        read_only_fields = fields


class SubmitKycSerializer(serializers.Serializer):
    documentType = serializers.ChoiceField(choices=KycSubmission.DOCUMENT_TYPE_CHOICES)
    documentUrl = serializers.URLField(max_length=500)
    selfieUrl = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)


class MyKycSerializer(serializers.Serializer):
    kycStatus = serializers.CharField()
    latestSubmission = KycSubmissionSerializer(allow_null=True)
