"""JSON representations of the core models (camelCase keys)."""

from .models import ContactSubmission, SiteSettings


def serialize_contact(submission: ContactSubmission) -> dict:
    return {
        "id": submission.pk,
        "name": submission.name,
        "email": submission.email,
        "phone": submission.phone,
        "message": submission.message,
        "status": submission.status,
        "reply": submission.reply,
        "repliedAt": submission.replied_at.isoformat() if submission.replied_at else None,
        "createdAt": submission.created_at.isoformat(),
        "updatedAt": submission.updated_at.isoformat(),
    }


def serialize_setting(setting: SiteSettings) -> dict:
    return {
        "id": setting.pk,
        "type": setting.type,
        "key": setting.key,
        "value": setting.value,
        "description": setting.description,
        "createdAt": setting.created_at.isoformat(),
        "updatedAt": setting.updated_at.isoformat(),
    }


def group_settings(settings: list[SiteSettings]) -> dict:
    """Nest settings as ``{type: {key: decoded value}}``."""
    grouped: dict[str, dict] = {}
    for setting in settings:
        grouped.setdefault(setting.type, {})[setting.key] = setting.decoded_value
    return grouped
