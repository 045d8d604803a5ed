"""Core app admin configuration."""

from django.contrib import admin

from .models import ContactSubmission, SiteSettings


@admin.register(ContactSubmission)
class ContactSubmissionAdmin(admin.ModelAdmin):
    """Admin interface for contact form submissions."""

    list_display = ("name", "email", "phone", "status", "replied_at", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("name", "email", "phone", "message")
    readonly_fields = ("replied_at", "created_at", "updated_at")
    ordering = ("-created_at",)


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    list_display = ("type", "key", "description", "updated_at")
    list_filter = ("type",)
    search_fields = ("key", "value", "description")
    readonly_fields = ("created_at", "updated_at")
