from django.contrib.auth.base_user import BaseUserManager
from django.db import models


class UserQuerySet(models.QuerySet):
    """
    Queryset helpers for workspace members.

    Example usage:
        # Candidates for task assignment
        User.objects.active()

        # Resolve "jane" or "jane@co.com" typed by a person (or a model)
        User.objects.active().match_reference("jane")
    """

    def active(self):
        """Only users who can log in and receive tasks."""
        return self.filter(is_active=True)

    def by_email(self, email):
        """Exact, case-insensitive email match."""
        return self.filter(email__iexact=email.strip())

    def by_name_fragment(self, fragment):
        """Case-insensitive partial name match."""
        return self.filter(name__icontains=fragment.strip())

    def match_reference(self, reference):
        """
        Resolve a free-form user reference.

        Exact email wins; otherwise fall back to a partial name match.
        Returns the first match, or None for no match or a blank reference.
        """
        if not reference or not reference.strip():
            return None
        user = self.by_email(reference).order_by('id').first()
        if user is None:
            user = self.by_name_fragment(reference).order_by('id').first()
        return user


class UserManager(BaseUserManager.from_queryset(UserQuerySet)):
    """Manager for the email-identified workspace user."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', 'admin')

        if extra_fields.get('is_staff') is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get('is_superuser') is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)
