from django.apps import AppConfig
from django.db.models.signals import post_migrate
import logging
import os

logger = logging.getLogger(__name__)


def create_superadmin(sender, **kwargs):
    from django.contrib.auth import get_user_model
    User = get_user_model()

    phone = os.getenv("DJANGO_SUPERUSER_PHONE", "+237600000000")
    password = os.getenv("DJANGO_SUPERUSER_PASSWORD", "superadmin")
    name = os.getenv("DJANGO_SUPERUSER_NAME", "Super Admin")

    if not User.objects.filter(phone=phone).exists():
        User.objects.create_superuser(
            phone=phone,
            password=password,
            name=name,
        )
        logger.info("Default superadmin %s created", phone)


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "users"

    def ready(self):
        if os.getenv("CREATE_SUPERADMIN") == "True":
            post_migrate.connect(create_superadmin, sender=self)
