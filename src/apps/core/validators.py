"""Payload validation for the contact, email relay and settings endpoints."""

import uuid

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from .http import clean_str, parse_id
from .models import ContactSubmission

REQUIRED = "This field is required."


def _email(value: str) -> str | None:
    try:
        validate_email(value)
    except ValidationError:
        return "Enter a valid email address."
    return None


def clean_contact(data: dict) -> tuple[dict, dict]:
    """Public contact form: ``name``, ``email``, ``phone?``, ``message``, ``privacyAgreed``."""
    fields: dict = {}
    errors: dict = {}

    for key in ("name", "email", "message"):
        value = clean_str(data.get(key))
        if not value:
            errors[key] = REQUIRED
        else:
            fields[key] = value

    if "email" in fields and (problem := _email(fields["email"])):
        errors["email"] = problem
    if len(fields.get("name", "")) > 255:
        errors["name"] = "Ensure this value has at most 255 characters."

    phone = clean_str(data.get("phone"))
    if len(phone) > 50:
        errors["phone"] = "Ensure this value has at most 50 characters."
    fields["phone"] = phone

    if data.get("privacyAgreed") is not True:
        errors["privacyAgreed"] = "You must agree to the privacy policy."

    return fields, errors


def clean_contact_update(data: dict) -> tuple[int | None, dict, dict]:
    """Admin update: ``{id, status?, reply?}``. Returns ``(pk, fields, errors)``."""
    fields: dict = {}
    errors: dict = {}

    pk = parse_id(data.get("id"))
    if pk is None:
        errors["id"] = REQUIRED

    if "status" in data:
        if data["status"] not in ContactSubmission.Status.values:
            errors["status"] = f"Must be one of: {', '.join(ContactSubmission.Status.values)}"
        else:
            fields["status"] = data["status"]

    if "reply" in data:
        reply = data["reply"]
        if reply is not None and not isinstance(reply, str):
            errors["reply"] = "Must be a string."
        else:
            fields["reply"] = reply.strip() if reply else None

    return pk, fields, errors


def clean_send_email(data: dict) -> tuple[dict, dict]:
    """Public email form: ``subject``, ``body``, ``captcha``, ``captchaId`` plus optional contact fields."""
    fields: dict = {}
    errors: dict = {}

    subject = clean_str(data.get("subject"))
    if len(subject) < 2:
        errors["subject"] = "Ensure this value has at least 2 characters."
    body = clean_str(data.get("body"))
    if len(body) < 10:
        errors["body"] = "Ensure this value has at least 10 characters."

    captcha = clean_str(data.get("captcha"))
    if len(captcha) != 4:
        errors["captcha"] = "Ensure this value has exactly 4 characters."
    captcha_id = clean_str(data.get("captchaId"))
    try:
        uuid.UUID(captcha_id)
    except ValueError:
        errors["captchaId"] = "Must be a valid UUID."

    email = clean_str(data.get("email"))
    if email and (problem := _email(email)):
        errors["email"] = problem

    fields.update(
        subject=subject,
        body=body,
        captcha=captcha,
        captcha_id=captcha_id,
        name=clean_str(data.get("name")),
        email=email,
        phone=clean_str(data.get("phone")),
        message=clean_str(data.get("message")),
    )
    return fields, errors


def clean_setting(entry) -> tuple[dict, dict]:
    """One settings entry: ``{type, key, value, description?}``."""
    if not isinstance(entry, dict):
        return {}, {"settings": "Each entry must be an object."}

    fields: dict = {}
    errors: dict = {}
    for key in ("type", "key"):
        value = clean_str(entry.get(key))
        if not value:
            errors[key] = REQUIRED
        else:
            fields[key] = value
    if "value" not in entry or entry["value"] is None:
        errors["value"] = REQUIRED
    else:
        fields["value"] = entry["value"]
    if entry.get("description") is not None:
        fields["description"] = clean_str(entry["description"])
    return fields, errors
