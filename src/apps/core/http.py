"""Helpers shared by the JSON API views."""

import json

from django.http import HttpRequest, JsonResponse


class InvalidPayload(ValueError):
    """Raised when a request body is not a JSON object."""


def read_json(request: HttpRequest) -> dict:
    """Decode the request body as a JSON object."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidPayload("Invalid JSON body") from exc
    if not isinstance(data, dict):
        raise InvalidPayload("JSON body must be an object")
    return data


def invalid_payload(exc: InvalidPayload) -> JsonResponse:
    return JsonResponse({"error": str(exc)}, status=400)


def validation_failed(errors: dict[str, str]) -> JsonResponse:
    return JsonResponse({"error": "Validation failed", "details": errors}, status=400)


def server_error(message: str) -> JsonResponse:
    """Generic 500; the caller logs the detail."""
    return JsonResponse({"error": message}, status=500)


def parse_id(value) -> int | None:
    """Return a positive integer primary key, or None if the value isn't one."""
    if isinstance(value, bool):
        return None
    try:
        pk = int(value)
    except (TypeError, ValueError):
        return None
    return pk if pk > 0 else None


def clean_str(value) -> str:
    return str(value).strip() if value is not None else ""
