"""Query construction for the showcase models.

Views go through these repositories instead of building querysets
themselves. Ordering changes (reindex and swap) run inside a single
database transaction, so either every row gets its new order or none do.
"""

import logging

from django.db import transaction
from django.db.models import F, Max, QuerySet

from .filters import DocumentFilter, ProjectFilter
from .models import Carousel, Document, Project

logger = logging.getLogger(__name__)


def _next_order(qs: QuerySet) -> int:
    current = qs.aggregate(highest=Max("order"))["highest"]
    return (current or 0) + 1


def _apply_fields(obj, fields: dict) -> list[str]:
    for name, value in fields.items():
        setattr(obj, name, value)
    return [*fields.keys(), "updated_at"]


class ProjectRepository:
    """Persistence for :class:`Project`."""

    model = Project

    def find(self, filters: ProjectFilter, *, with_documents: bool = False) -> list[Project]:
        qs = filters.apply(Project.objects.all()).order_by("order", "id")
        if with_documents:
            qs = qs.prefetch_related("documents")
        return list(qs)

    def get(self, pk: int, *, with_documents: bool = False) -> Project:
        qs = Project.objects.all()
        if with_documents:
            qs = qs.prefetch_related("documents")
        return qs.get(pk=pk)

    def next_order(self, category: str) -> int:
        return _next_order(Project.objects.filter(category=category))

    @transaction.atomic
    def create(self, **fields) -> Project:
        fields["order"] = self.next_order(fields["category"])
        return Project.objects.create(**fields)

    def update(self, project: Project, fields: dict) -> Project:
        if fields:
            project.save(update_fields=_apply_fields(project, fields))
        return project

    def delete(self, project: Project) -> None:
        # Linked documents survive with project = NULL (on_delete=SET_NULL)
        project.delete()

    def reindex(self, ids: list[int]) -> None:
        """
        Give each project ``order = position + 1`` following ``ids``.

        Raises ``Project.DoesNotExist`` without touching any row when an id is
        unknown.
        """
        with transaction.atomic():
            found = set(Project.objects.select_for_update().filter(pk__in=ids).values_list("pk", flat=True))
            missing = [pk for pk in ids if pk not in found]
            if missing:
                raise Project.DoesNotExist(f"Unknown project ids: {missing}")
            for position, pk in enumerate(ids):
                Project.objects.filter(pk=pk).update(order=position + 1)


class DocumentRepository:
    """Persistence for :class:`Document`."""

    model = Document

    def find(self, filters: DocumentFilter) -> list[Document]:
        qs = filters.apply(Document.objects.select_related("project"))
        if filters.active_only:
            qs = qs.order_by("order", "id")
        else:
            qs = qs.order_by("category", "order", "id")
        return list(qs)

    def get(self, pk: int) -> Document:
        return Document.objects.select_related("project").get(pk=pk)

    def next_order(self, category: str) -> int:
        return _next_order(Document.objects.filter(category=category))

    @transaction.atomic
    def create(self, **fields) -> Document:
        fields["order"] = self.next_order(fields["category"])
        return Document.objects.create(**fields)

    def update(self, document: Document, fields: dict) -> Document:
        if fields:
            document.save(update_fields=_apply_fields(document, fields))
        return document

    def delete(self, document: Document) -> None:
        document.delete()

    def project_exists(self, pk: int) -> bool:
        return Project.objects.filter(pk=pk).exists()

    def record_download(self, pk: int) -> None:
        """Increment the download counter; failures are logged and swallowed."""
        try:
            Document.objects.filter(pk=pk).update(download_count=F("download_count") + 1)
        except Exception:
            logger.exception("Failed to record download for document #%d", pk)


class CarouselRepository:
    """Persistence for :class:`Carousel`."""

    model = Carousel

    def find(self, *, active_only: bool) -> list[Carousel]:
        qs = Carousel.objects.all()
        if active_only:
            qs = qs.filter(is_active=True)
        return list(qs.order_by("order", "id"))

    def get(self, pk: int) -> Carousel:
        return Carousel.objects.get(pk=pk)

    @transaction.atomic
    def create(self, **fields) -> Carousel:
        fields["order"] = _next_order(Carousel.objects.all())
        return Carousel.objects.create(**fields)

    def update(self, item: Carousel, fields: dict) -> Carousel:
        if fields:
            item.save(update_fields=_apply_fields(item, fields))
        return item

    def delete(self, item: Carousel) -> None:
        item.delete()

    def swap(self, pk: int, direction: str) -> Carousel | None:
        """
        Exchange order values with the nearest item above (``up``) or below (``down``).

        Returns the neighbour that was swapped with, or ``None`` at a boundary,
        in which case nothing is written. Raises ``Carousel.DoesNotExist`` for
        an unknown id.
        """
        with transaction.atomic():
            current = Carousel.objects.select_for_update().get(pk=pk)
            neighbours = Carousel.objects.select_for_update().exclude(pk=current.pk)
            if direction == "up":
                adjacent = neighbours.filter(order__lt=current.order).order_by("-order", "-id").first()
            else:
                adjacent = neighbours.filter(order__gt=current.order).order_by("order", "id").first()
            if adjacent is None:
                return None
            current_order, adjacent_order = current.order, adjacent.order
            Carousel.objects.filter(pk=current.pk).update(order=adjacent_order)
            Carousel.objects.filter(pk=adjacent.pk).update(order=current_order)
            adjacent.order = current_order
            return adjacent
