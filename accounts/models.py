from django.contrib.auth.models import AbstractUser
from django.db import models

from accounts.managers import UserManager


class User(AbstractUser):
    """
    Workspace member.

    Identified by email rather than username. ``role`` controls access to
    admin-only operations; ``is_active`` (inherited) gates login and
    eligibility as a task assignee.
    """

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        USER = 'user', 'User'

    username = None
    email = models.EmailField(
        unique=True,
        help_text="Login identifier and primary way to reference a member"
    )
    name = models.CharField(
        max_length=255,
        help_text="Display name"
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.USER,
        help_text="Workspace role"
    )
    profile_photo = models.URLField(
        max_length=500,
        blank=True,
        help_text="Avatar URL (e.g. synced from Google Workspace)"
    )
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = UserManager()

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ['name']

    def __str__(self):
        return f"{self.name} <{self.email}>"

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN
