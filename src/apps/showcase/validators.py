"""Payload validation for the showcase admin endpoints.

Each ``clean_*`` function maps a camelCase JSON payload onto model field
names and returns ``(fields, errors)``. With ``partial=True`` only the keys
present in the payload are validated and returned.
"""

from apps.core.http import parse_id

from .models import Carousel, Project

REQUIRED = "This field is required."


def _text(data: dict, key: str, fields: dict, errors: dict, attr: str, *, required: bool, partial: bool,
          nullable: bool = False) -> None:
    if key not in data:
        if required and not partial:
            errors[key] = REQUIRED
        return
    value = data[key]
    if value is None and nullable:
        fields[attr] = None
        return
    if not isinstance(value, str):
        errors[key] = "Must be a string."
        return
    value = value.strip()
    if required and not value:
        errors[key] = REQUIRED
        return
    fields[attr] = value if (value or not nullable) else None


def _bool(data: dict, key: str, fields: dict, errors: dict, attr: str) -> None:
    if key not in data:
        return
    if not isinstance(data[key], bool):
        errors[key] = "Must be true or false."
        return
    fields[attr] = data[key]


def _choice(data: dict, key: str, fields: dict, errors: dict, attr: str, choices: list[str], *,
            required: bool, partial: bool) -> None:
    if key not in data or data[key] in (None, ""):
        if required and not partial:
            errors[key] = REQUIRED
        return
    if data[key] not in choices:
        errors[key] = f"Must be one of: {', '.join(choices)}"
        return
    fields[attr] = data[key]


def _order(data: dict, fields: dict, errors: dict) -> None:
    if "order" not in data:
        return
    value = data["order"]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        errors["order"] = "Must be a non-negative integer."
        return
    fields["order"] = value


def clean_details(value) -> tuple[dict | None, str | None]:
    """Validate the structured ``details`` blob of a project."""
    if not isinstance(value, dict):
        return None, "Must be an object."
    items = value.get("items", [])
    if not isinstance(items, list):
        return None, "items must be a list."
    cleaned_items = []
    for index, item in enumerate(items):
        if not isinstance(item, dict) or not isinstance(item.get("label"), str) or not isinstance(
            item.get("value"), str
        ):
            return None, f"items[{index}] must have string label and value."
        cleaned_items.append({"label": item["label"], "value": item["value"]})
    details: dict = {"items": cleaned_items}
    for key in ("features", "additionalImages"):
        if key in value:
            entries = value[key]
            if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
                return None, f"{key} must be a list of strings."
            details[key] = entries
    if "description" in value:
        if not isinstance(value["description"], str):
            return None, "description must be a string."
        details["description"] = value["description"]
    return details, None


def clean_project(data: dict, *, partial: bool = False) -> tuple[dict, dict[str, str]]:
    fields: dict = {}
    errors: dict[str, str] = {}
    _text(data, "title", fields, errors, "title", required=True, partial=partial)
    _choice(data, "category", fields, errors, "category", Project.Category.values, required=True, partial=partial)
    _text(data, "imageUrl", fields, errors, "image_url", required=True, partial=partial)
    _text(data, "description", fields, errors, "description", required=False, partial=partial, nullable=True)
    if data.get("details") is not None:
        details, problem = clean_details(data["details"])
        if problem:
            errors["details"] = problem
        else:
            fields["details"] = details
    _bool(data, "isActive", fields, errors, "is_active")
    if partial:
        _order(data, fields, errors)
    return fields, errors


def clean_document(data: dict, *, partial: bool = False) -> tuple[dict, dict[str, str]]:
    fields: dict = {}
    errors: dict[str, str] = {}
    _text(data, "title", fields, errors, "title", required=True, partial=partial)
    _text(data, "fileUrl", fields, errors, "file_url", required=True, partial=partial)
    _text(data, "fileType", fields, errors, "file_type", required=True, partial=partial)
    _text(data, "category", fields, errors, "category", required=True, partial=partial)
    _text(data, "description", fields, errors, "description", required=False, partial=partial, nullable=True)
    _bool(data, "isActive", fields, errors, "is_active")
    if partial:
        _order(data, fields, errors)
    if "projectId" in data:
        raw = data["projectId"]
        if raw in (None, ""):
            fields["project_id"] = None
        elif (project_id := parse_id(raw)) is None:
            errors["projectId"] = "Must be a project id."
        else:
            fields["project_id"] = project_id
    return fields, errors


def clean_carousel(data: dict, *, partial: bool = False) -> tuple[dict, dict[str, str]]:
    fields: dict = {}
    errors: dict[str, str] = {}
    _text(data, "imageUrl", fields, errors, "image_url", required=True, partial=partial)
    for key, attr in (("title", "title"), ("description", "description"), ("linkUrl", "link_url"),
                      ("linkText", "link_text")):
        if data.get(key) is None:
            continue
        _text(data, key, fields, errors, attr, required=False, partial=partial)
    _choice(data, "textPosition", fields, errors, "text_position", Carousel.TextPosition.values,
            required=False, partial=partial)
    _choice(data, "textDirection", fields, errors, "text_direction", Carousel.TextDirection.values,
            required=False, partial=partial)
    _bool(data, "isActive", fields, errors, "is_active")
    return fields, errors
