"""Custom user model for the Banglong admin panel."""

import secrets
from datetime import timedelta
from typing import ClassVar

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.utils import timezone


class BanglongUserManager(UserManager):
    """User manager that stores email lowercased and fills in the username from it."""

    @classmethod
    def normalize_email(cls, email):
        # Logins match the address exactly, and the API lowercases what it receives
        return (email or "").strip().lower()

    def create_user(self, username=None, email=None, password=None, **extra_fields):
        """Create a user with email as username if username not provided."""
        email = self.normalize_email(email)
        if not username and email:
            username = email
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        """Create a superuser with email as username if username not provided."""
        email = self.normalize_email(email)
        if not username and email:
            username = email
        extra_fields.setdefault("role", User.Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """Admin panel account; logs in with email and password."""

    class Role(models.TextChoices):
        """Roles that gate privileged operations."""

        ADMIN = "admin", "Admin"
        EDITOR = "editor", "Editor"

    name = models.CharField("display name", max_length=255, blank=True)
    email = models.EmailField("email address", unique=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.ADMIN)
    has_changed_password = models.BooleanField(
        "has changed password",
        default=False,
        help_text="False until the user replaces the generated invitation password.",
    )
    reset_token = models.CharField(max_length=64, blank=True, default="", db_index=True)
    reset_token_expiry = models.DateTimeField(null=True, blank=True)

    objects = BanglongUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: ClassVar[list[str]] = ["username"]

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering: ClassVar[list[str]] = ["-date_joined"]

    def __str__(self) -> str:
        return self.email or self.username

    @property
    def is_admin_role(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_superuser

    def issue_reset_token(self) -> str:
        """Generate a password reset token valid for PASSWORD_RESET_TTL seconds."""
        self.reset_token = secrets.token_hex(32)
        self.reset_token_expiry = timezone.now() + timedelta(seconds=settings.PASSWORD_RESET_TTL)
        return self.reset_token

    def reset_token_is_valid(self, token: str) -> bool:
        if not self.reset_token or not token or self.reset_token_expiry is None:
            return False
        if timezone.now() > self.reset_token_expiry:
            return False
        return secrets.compare_digest(self.reset_token, token)

    def clear_reset_token(self) -> None:
        self.reset_token = ""
        self.reset_token_expiry = None
