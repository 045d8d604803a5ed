"""Admin configuration for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for the custom User model."""

    list_display = ("email", "name", "role", "has_changed_password", "is_active", "date_joined")
    list_filter = ("role", "has_changed_password", "is_active")
    search_fields = ("email", "name", "username")
    readonly_fields = ("reset_token", "reset_token_expiry")
    ordering = ("-date_joined",)

    fieldsets = (
        *BaseUserAdmin.fieldsets,
        ("Banglong", {"fields": ("name", "role", "has_changed_password", "reset_token", "reset_token_expiry")}),
    )

    add_fieldsets = (*BaseUserAdmin.add_fieldsets, ("Banglong", {"fields": ("email", "name", "role")}))
