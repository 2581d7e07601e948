from rest_framework import serializers
from .models import VendorApplication, VendorApplicationDocument


class VendorApplicationDocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = VendorApplicationDocument
        fields = ['id', 'kind', 'documentUrl', 'createdAt']
        read_only_fields = fields


class VendorApplicationSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(source='user.phone', read_only=True)
    name = serializers.CharField(source='user.name', read_only=True)
    documents = VendorApplicationDocumentSerializer(many=True, read_only=True)

    class Meta:
        model = VendorApplication
        fields = ['id', 'user', 'phone', 'name', 'type', 'status',
                  'businessName', 'businessAddress', 'businessPhone', 'businessEmail',
                  'fullNameOnId', 'location', 'phoneNormalized',
                  'rejectionReason', 'reviewedBy', 'reviewedAt', 'createdAt', 'updatedAt',
                  'documents']
        read_only_fields = fields


class CreateApplicationSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=VendorApplication.TYPE_CHOICES)


class BusinessDetailsSerializer(serializers.Serializer):
    businessName = serializers.CharField(max_length=255)
    businessAddress = serializers.CharField()
    businessPhone = serializers.CharField(max_length=30)
    businessEmail = serializers.EmailField(required=False, allow_blank=True, allow_null=True)


class IndividualDetailsSerializer(serializers.Serializer):
    fullNameOnId = serializers.CharField(max_length=255)
    location = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=30)


class DocumentSerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=VendorApplicationDocument.KIND_CHOICES)
    documentUrl = serializers.URLField(max_length=500)
