"""Payload validation for the user management endpoints."""

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from apps.core.http import clean_str, parse_id

from .models import User

REQUIRED = "This field is required."
MIN_PASSWORD_LENGTH = 6


def clean_user(data: dict, *, require_id: bool = False) -> tuple[dict, dict]:
    """``{name, email, role?, password?}`` plus ``id`` for updates."""
    fields: dict = {}
    errors: dict = {}

    if require_id:
        pk = parse_id(data.get("id"))
        if pk is None:
            errors["id"] = REQUIRED
        fields["id"] = pk

    name = clean_str(data.get("name"))
    if len(name) < 2:
        errors["name"] = "Ensure this value has at least 2 characters."
    fields["name"] = name

    email = clean_str(data.get("email")).lower()
    try:
        validate_email(email)
    except ValidationError:
        errors["email"] = "Enter a valid email address."
    fields["email"] = email

    role = data.get("role") or User.Role.ADMIN
    if role not in User.Role.values:
        errors["role"] = f"Must be one of: {', '.join(User.Role.values)}"
    fields["role"] = role

    password = data.get("password")
    if password not in (None, ""):
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Ensure this value has at least {MIN_PASSWORD_LENGTH} characters."
        else:
            fields["password"] = password

    return fields, errors


def clean_new_password(value) -> str | None:
    """Return an error message, or None when the password is acceptable."""
    if not isinstance(value, str) or not value:
        return REQUIRED
    if len(value) < MIN_PASSWORD_LENGTH:
        return f"Ensure this value has at least {MIN_PASSWORD_LENGTH} characters."
    return None
