"""Typed query filters for the showcase list endpoints."""

from dataclasses import dataclass

from django.db.models import QuerySet
from django.http import QueryDict

from apps.core.http import parse_id


@dataclass(frozen=True)
class ProjectFilter:
    category: str | None = None
    active_only: bool = True

    @classmethod
    def from_query(cls, query: QueryDict, *, active_only: bool) -> "ProjectFilter":
        return cls(category=query.get("category") or None, active_only=active_only)

    def apply(self, qs: QuerySet) -> QuerySet:
        if self.active_only:
            qs = qs.filter(is_active=True)
        if self.category:
            qs = qs.filter(category=self.category)
        return qs


@dataclass(frozen=True)
class DocumentFilter:
    category: str | None = None
    project_id: int | None = None
    active_only: bool = True

    @classmethod
    def from_query(cls, query: QueryDict, *, active_only: bool) -> "DocumentFilter":
        return cls(
            category=query.get("category") or None,
            project_id=parse_id(query.get("projectId")),
            active_only=active_only,
        )

    def apply(self, qs: QuerySet) -> QuerySet:
        if self.active_only:
            qs = qs.filter(is_active=True)
        if self.category:
            qs = qs.filter(category=self.category)
        if self.project_id is not None:
            qs = qs.filter(project_id=self.project_id)
        return qs
