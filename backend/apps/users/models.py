from django.db import models


class User(models.Model):
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    # Hashed credential; blank for users created without registering
    password = models.CharField(max_length=128, blank=True, default="")
    age = models.PositiveIntegerField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        ordering = ["-id"]

    def __str__(self):
        return f"{self.name} <{self.email}>"
