import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

from users.models import RiderProfile
from vendors.models import VendorProfile
from .exceptions import ConflictError, UnauthorizedError, ValidationError
from .models import CustomUser
from .phone import normalize_cameroon_phone

logger = logging.getLogger(__name__)

User = get_user_model()


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    return {
        "accessToken": str(refresh.access_token),
        "refreshToken": str(refresh),
    }


class CustomUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ['id', 'phone', 'email', 'name', 'role']


class RegisterSerializer(serializers.Serializer):
    phone = serializers.CharField()
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    password = serializers.CharField(write_only=True, min_length=6)
    name = serializers.CharField()
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, default=CustomUser.CUSTOMER)

    # Vendor fields
    businessName = serializers.CharField(required=False, allow_blank=True)
    businessAddress = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(required=False, allow_blank=True)

    def validate(self, data):
        if data['role'] == CustomUser.ADMIN:
            raise ValidationError("Admin registration is not allowed")
        if data['role'] == CustomUser.AGENCY:
            raise ValidationError("Delivery agency accounts can only be created by administrators")
        if data['role'] not in (CustomUser.CUSTOMER, CustomUser.VENDOR):
            raise ValidationError("Role must be customer or vendor")

        data['phone'] = normalize_cameroon_phone(data['phone'])
        if CustomUser.objects.filter(phone=data['phone']).exists():
            raise ConflictError("Phone number already registered")

        if data.get('email'):
            if CustomUser.objects.filter(email__iexact=data['email']).exists():
                raise ConflictError("Email already registered")
        else:
            data['email'] = None

        if data['role'] == CustomUser.VENDOR:
            if not data.get('businessName') or not data.get('businessAddress'):
                raise ValidationError("Vendor registration requires businessName and businessAddress")
        return data

    def create(self, validated_data):
        try:
            with transaction.atomic():
                user = CustomUser.objects.create_user(
                    phone=validated_data["phone"],
                    password=validated_data["password"],
                    email=validated_data["email"],
                    name=validated_data["name"],
                    role=validated_data["role"],
                )
                if user.role == CustomUser.VENDOR:
                    VendorProfile.objects.create(
                        user=user,
                        businessName=validated_data["businessName"],
                        businessAddress=validated_data["businessAddress"],
                        city=validated_data.get("city", ""),
                    )
        except IntegrityError:
            # Another registration took the phone or e-mail after validation
            if CustomUser.objects.filter(phone=validated_data["phone"]).exists():
                raise ConflictError("Phone number already registered")
            raise ConflictError("Email already registered")
        logger.info("Registered %s account %s", user.role, user.id)
        return user


class LoginSerializer(serializers.Serializer):
    phone = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        phone = normalize_cameroon_phone(data['phone'])
        try:
            user = CustomUser.objects.get(phone=phone)
        except CustomUser.DoesNotExist:
            raise UnauthorizedError("Invalid credentials")
        if not user.is_active:
            raise UnauthorizedError("Account is suspended")
        if not user.check_password(data['password']):
            raise UnauthorizedError("Invalid credentials")

        data["user"] = user
        return data

    def create(self, validated_data):
        user = validated_data["user"]
        return {
            **issue_tokens(user),
            "user": CustomUserSerializer(user).data,
        }


class UpgradeRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES)
    businessName = serializers.CharField(required=False, allow_blank=True)
    businessAddress = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(required=False, allow_blank=True)
    vehicleType = serializers.CharField(required=False, allow_blank=True)

    def validate(self, data):
        user = self.context["user"]
        if user.role != CustomUser.CUSTOMER:
            raise ValidationError("Only customers can upgrade their role")
        if data['role'] == CustomUser.AGENCY:
            raise ValidationError("Delivery agency accounts can only be created by administrators")
        if data['role'] not in (CustomUser.VENDOR, CustomUser.RIDER):
            raise ValidationError("Only vendor or rider upgrades are allowed")

        if data['role'] == CustomUser.VENDOR:
            if not data.get('businessName') or not data.get('businessAddress'):
                raise ValidationError("Vendor upgrade requires businessName and businessAddress")
        if data['role'] == CustomUser.RIDER and not data.get('city'):
            raise ValidationError("Rider upgrade requires city")
        return data

    def create(self, validated_data):
        user = self.context["user"]
        with transaction.atomic():
            user.role = validated_data["role"]
            user.save(update_fields=["role"])
            if user.role == CustomUser.VENDOR:
                VendorProfile.objects.create(
                    user=user,
                    businessName=validated_data["businessName"],
                    businessAddress=validated_data["businessAddress"],
                    city=validated_data.get("city", ""),
                )
            else:
                RiderProfile.objects.create(
                    user=user,
                    city=validated_data["city"],
                    vehicleType=validated_data.get("vehicleType", ""),
                )
        logger.info("User %s upgraded to %s", user.id, user.role)
        return user
