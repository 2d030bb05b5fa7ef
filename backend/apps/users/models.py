from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    # id, username, password, is_active, is_staff, groups, user_permissions are inherited
    name = models.CharField(max_length=150)
    # Customers sign in with their email address
    email = models.EmailField(unique=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    def __str__(self):
        return self.email
