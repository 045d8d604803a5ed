"""JSON representation of admin panel users."""

from .models import User


def serialize_user(user: User) -> dict:
    """Public fields only; password hashes and reset tokens never leave the server."""
    return {
        "id": user.pk,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "hasChangedPassword": user.has_changed_password,
        "createdAt": user.date_joined.isoformat(),
    }
