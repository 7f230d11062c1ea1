from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    # username, password, first_name, last_name, is_staff, is_superuser are inherited
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=50, blank=True, null=True)

    def __str__(self):
        return self.username
