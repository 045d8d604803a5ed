"""Typed query filter for the contact submission admin list."""

from dataclasses import dataclass
from datetime import date

from django.db.models import Q, QuerySet
from django.http import QueryDict
from django.utils.dateparse import parse_date

from .models import ContactSubmission

MAX_PAGE_SIZE = 100


def _int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _date(value) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class ContactFilter:
    status: str | None = None
    search: str = ""
    date_from: date | None = None
    date_to: date | None = None
    limit: int = MAX_PAGE_SIZE
    offset: int = 0

    @classmethod
    def from_query(cls, query: QueryDict) -> "ContactFilter":
        status = query.get("status") or None
        if status not in ContactSubmission.Status.values:
            status = None
        return cls(
            status=status,
            search=(query.get("q") or "").strip(),
            date_from=_date(query.get("dateFrom")),
            date_to=_date(query.get("dateTo")),
            limit=min(max(_int(query.get("limit"), MAX_PAGE_SIZE), 1), MAX_PAGE_SIZE),
            offset=max(_int(query.get("offset"), 0), 0),
        )

    def apply(self, qs: QuerySet) -> QuerySet:
        if self.status:
            qs = qs.filter(status=self.status)
        if self.search:
            qs = qs.filter(
                Q(name__icontains=self.search)
                | Q(email__icontains=self.search)
                | Q(phone__icontains=self.search)
                | Q(message__icontains=self.search)
            )
        if self.date_from:
            qs = qs.filter(created_at__date__gte=self.date_from)
        if self.date_to:
            qs = qs.filter(created_at__date__lte=self.date_to)
        return qs
