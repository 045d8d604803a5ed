"""Core app models."""

import json
from typing import ClassVar

from django.db import models


class ContactSubmission(models.Model):
    """Stores contact form submissions and the admin reply."""

    class Status(models.TextChoices):
        """Admin-driven handling status."""

        NEW = "new", "New"
        PROCESSING = "processing", "Processing"
        COMPLETED = "completed", "Completed"

    name = models.CharField(max_length=255)
    email = models.EmailField()
    phone = models.CharField(max_length=50, blank=True, default="")
    message = models.TextField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW, db_index=True)
    reply = models.TextField(null=True, blank=True)
    replied_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["-created_at"]
        verbose_name = "contact submission"
        verbose_name_plural = "contact submissions"

    def __str__(self) -> str:
        return f"{self.name} - {self.email} ({self.created_at:%Y-%m-%d})"


class SiteSettings(models.Model):
    """Key-value configuration grouped by type (``seo``, ``email``, ...)."""

    type = models.CharField(max_length=50)
    key = models.CharField(max_length=100)
    value = models.TextField()
    description = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["type", "key"]
        verbose_name = "site setting"
        verbose_name_plural = "site settings"
        constraints: ClassVar[list] = [
            models.UniqueConstraint(fields=["type", "key"], name="unique_site_setting_type_key"),
        ]

    def __str__(self) -> str:
        return f"{self.type}.{self.key}"

    @property
    def decoded_value(self):
        """The stored value, JSON-decoded when it parses."""
        try:
            return json.loads(self.value)
        except (json.JSONDecodeError, TypeError):
            return self.value

    @staticmethod
    def encode_value(value) -> str:
        """Objects, lists and booleans are stored as JSON, everything else as ``str``."""
        if isinstance(value, (dict, list, bool)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)
