from django.db import models


class AdminSetting(models.Model):
    key = models.CharField(max_length=100, unique=True)
    value = models.JSONField()
    description = models.CharField(max_length=255, blank=True, default='')
    updatedAt = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.key
