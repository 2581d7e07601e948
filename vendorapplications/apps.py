from django.apps import AppConfig


class VendorapplicationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vendorapplications"
