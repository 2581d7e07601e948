from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class CustomUserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, phone, password=None, **extra_fields):
        if not phone:
            raise ValueError("Phone number is required")
        email = extra_fields.pop("email", None)
        user = self.model(phone=phone, email=self.normalize_email(email) if email else None, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, phone, password=None, **extra_fields):
        extra_fields.setdefault("role", "admin")
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(phone, password, **extra_fields)


class CustomUser(AbstractUser):
    CUSTOMER = 'customer'
    VENDOR = 'vendor'
    RIDER = 'rider'
    AGENCY = 'agency'
    ADMIN = 'admin'

    ROLE_CHOICES = (
        (CUSTOMER, 'Customer'),
        (VENDOR, 'Vendor'),
        (RIDER, 'Rider'),
        (AGENCY, 'Delivery Agency'),
        (ADMIN, 'Admin'),
    )

    username = None
    phone = models.CharField(max_length=13, unique=True)  # +237XXXXXXXXX
    email = models.EmailField(unique=True, null=True, blank=True)
    name = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=CUSTOMER)
    createdAt = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = "phone"
    REQUIRED_FIELDS = ["name"]

    objects = CustomUserManager()

    def __str__(self):
        return f"{self.phone} ({self.role})"
