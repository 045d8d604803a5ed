"""Query construction for contact submissions and site settings."""

from django.db import transaction

from .filters import ContactFilter
from .models import ContactSubmission, SiteSettings


class ContactSubmissionRepository:
    """Async persistence for :class:`ContactSubmission` (used from async views)."""

    model = ContactSubmission

    async def create(self, **fields) -> ContactSubmission:
        return await ContactSubmission.objects.acreate(**fields)

    async def get(self, pk: int) -> ContactSubmission:
        return await ContactSubmission.objects.aget(pk=pk)

    async def find(self, filters: ContactFilter) -> tuple[list[ContactSubmission], int]:
        qs = filters.apply(ContactSubmission.objects.all()).order_by("-created_at", "-id")
        total = await qs.acount()
        items = [s async for s in qs[filters.offset : filters.offset + filters.limit]]
        return items, total

    async def save(self, submission: ContactSubmission, fields: list[str]) -> None:
        await submission.asave(update_fields=[*fields, "updated_at"])


class SiteSettingsRepository:
    """Persistence for the ``(type, key) -> value`` settings store."""

    model = SiteSettings

    def find(self, type_: str | None = None) -> list[SiteSettings]:
        qs = SiteSettings.objects.all()
        if type_:
            qs = qs.filter(type=type_)
        return list(qs)

    def get_value(self, type_: str, key: str, default=None):
        setting = SiteSettings.objects.filter(type=type_, key=key).first()
        return setting.decoded_value if setting else default

    async def aget_value(self, type_: str, key: str, default=None):
        setting = await SiteSettings.objects.filter(type=type_, key=key).afirst()
        return setting.decoded_value if setting else default

    def upsert(self, type_: str, key: str, value, description: str | None = None) -> SiteSettings:
        defaults = {"value": SiteSettings.encode_value(value)}
        if description is not None:
            defaults["description"] = description
        setting, _ = SiteSettings.objects.update_or_create(type=type_, key=key, defaults=defaults)
        return setting

    def upsert_many(self, entries: list[dict]) -> list[SiteSettings]:
        """Upsert every entry or none of them."""
        with transaction.atomic():
            return [
                self.upsert(entry["type"], entry["key"], entry["value"], entry.get("description"))
                for entry in entries
            ]

    def delete(self, type_: str, key: str) -> bool:
        deleted, _ = SiteSettings.objects.filter(type=type_, key=key).delete()
        return bool(deleted)
