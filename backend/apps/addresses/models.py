from django.db import models

from apps.users.models import User


class Address(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="addresses")
    street = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=50)
    country = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "addresses"
        indexes = [
            models.Index(fields=["user"], name="address_user_idx"),
        ]

    def __str__(self):
        return f"{self.street}, {self.zip_code} {self.city}, {self.country}"
