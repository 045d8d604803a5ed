"""JSON API views for projects, documents and the homepage carousel."""

import logging

from django.db import DatabaseError, IntegrityError
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.accounts.mixins import SessionRequiredMixin
from apps.core.http import (
    InvalidPayload,
    invalid_payload,
    parse_id,
    read_json,
    server_error,
    validation_failed,
)

from .filters import DocumentFilter, ProjectFilter
from .models import Carousel, Document, Project
from .repositories import CarouselRepository, DocumentRepository, ProjectRepository
from .serializers import serialize_carousel, serialize_document, serialize_project
from .validators import clean_carousel, clean_document, clean_project

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found"
DOCUMENT_NOT_FOUND = "Document not found"
CAROUSEL_NOT_FOUND = "Carousel item not found"


# ─────────────────────────────── Projects ────────────────────────────────────


class ProjectListView(View):
    """Public: active projects, optionally limited to one category."""

    projects = ProjectRepository()

    def get(self, request: HttpRequest) -> JsonResponse:
        filters = ProjectFilter.from_query(request.GET, active_only=True)
        try:
            projects = self.projects.find(filters)
        except DatabaseError:
            logger.exception("Failed to list projects")
            return server_error("Failed to fetch projects")
        return JsonResponse({"projects": [serialize_project(p) for p in projects]})


@method_decorator(csrf_exempt, name="dispatch")
class ProjectAdminView(SessionRequiredMixin, View):
    """Admin: list every project (with documents) and create new ones."""

    projects = ProjectRepository()

    def get(self, request: HttpRequest) -> JsonResponse:
        filters = ProjectFilter.from_query(request.GET, active_only=False)
        try:
            projects = self.projects.find(filters, with_documents=True)
        except DatabaseError:
            logger.exception("Failed to list projects for admin")
            return server_error("Failed to fetch projects")
        return JsonResponse({"projects": [serialize_project(p, with_documents=True) for p in projects]})

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_project(data)
        if errors:
            return validation_failed(errors)
        fields.setdefault("details", {"items": []})

        try:
            project = self.projects.create(**fields)
        except DatabaseError:
            logger.exception("Failed to create project %r", fields.get("title"))
            return server_error("Failed to create project")

        logger.info("Project #%d created in %s by %s", project.pk, project.category, request.user)
        return JsonResponse({"project": serialize_project(project)}, status=201)


@method_decorator(csrf_exempt, name="dispatch")
class ProjectDetailView(SessionRequiredMixin, View):
    """Read a project publicly; replace or delete it with a session."""

    public_methods = ("get",)
    projects = ProjectRepository()

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            project = self.projects.get(pk, with_documents=True)
        except Project.DoesNotExist:
            return JsonResponse({"error": PROJECT_NOT_FOUND}, status=404)

        # Anonymous visitors only see active projects and their active documents
        public = not request.user.is_authenticated
        if public and not project.is_active:
            return JsonResponse({"error": PROJECT_NOT_FOUND}, status=404)
        data = serialize_project(project, with_documents=True, active_documents_only=public)
        return JsonResponse({"project": data})

    def put(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        try:
            project = self.projects.get(pk)
        except Project.DoesNotExist:
            return JsonResponse({"error": PROJECT_NOT_FOUND}, status=404)

        fields, errors = clean_project(data, partial=True)
        if errors:
            return validation_failed(errors)

        try:
            project = self.projects.update(project, fields)
        except DatabaseError:
            logger.exception("Failed to update project #%d", pk)
            return server_error("Failed to update project")
        return JsonResponse({"project": serialize_project(project)})

    def delete(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            project = self.projects.get(pk)
        except Project.DoesNotExist:
            return JsonResponse({"error": PROJECT_NOT_FOUND}, status=404)

        try:
            self.projects.delete(project)
        except DatabaseError:
            logger.exception("Failed to delete project #%d", pk)
            return server_error("Failed to delete project")
        logger.info("Project #%d deleted by %s", pk, request.user)
        return JsonResponse({"success": True})


@method_decorator(csrf_exempt, name="dispatch")
class ProjectReorderView(SessionRequiredMixin, View):
    """Admin: reassign order = position + 1 following the submitted id list."""

    projects = ProjectRepository()

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        items = data.get("items")
        if not isinstance(items, list) or not items:
            return JsonResponse({"error": "Invalid ordering data"}, status=400)

        ids = [parse_id(item.get("id") if isinstance(item, dict) else item) for item in items]
        if None in ids or len(set(ids)) != len(ids):
            return JsonResponse({"error": "Invalid ordering data"}, status=400)

        try:
            self.projects.reindex(ids)
            filters = ProjectFilter(category=data.get("category") or None, active_only=False)
            projects = self.projects.find(filters)
        except Project.DoesNotExist:
            return JsonResponse({"error": PROJECT_NOT_FOUND}, status=404)
        except DatabaseError:
            logger.exception("Failed to reorder projects")
            return server_error("Failed to reorder projects")

        return JsonResponse({"success": True, "projects": [serialize_project(p) for p in projects]})


# ─────────────────────────────── Carousel ────────────────────────────────────


@method_decorator(csrf_exempt, name="dispatch")
class CarouselListView(SessionRequiredMixin, View):
    """Active banners publicly; creating one needs a session."""

    public_methods = ("get",)
    carousel = CarouselRepository()

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            items = self.carousel.find(active_only=True)
        except DatabaseError:
            logger.exception("Failed to list carousel items")
            return server_error("Failed to fetch carousel items")
        return JsonResponse({"carouselItems": [serialize_carousel(i) for i in items]})

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_carousel(data)
        if errors:
            return validation_failed(errors)
        fields.setdefault("is_active", True)

        try:
            item = self.carousel.create(**fields)
        except DatabaseError:
            logger.exception("Failed to create carousel item")
            return server_error("Failed to create carousel item")
        return JsonResponse({"carousel": serialize_carousel(item)}, status=201)


class CarouselAdminView(SessionRequiredMixin, View):
    """Admin: every banner including inactive ones."""

    carousel = CarouselRepository()

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            items = self.carousel.find(active_only=False)
        except DatabaseError:
            logger.exception("Failed to list carousel items for admin")
            return server_error("Failed to fetch carousel items")
        return JsonResponse({"carouselItems": [serialize_carousel(i) for i in items]})


@method_decorator(csrf_exempt, name="dispatch")
class CarouselDetailView(SessionRequiredMixin, View):
    """Read a banner publicly; update or delete it with a session."""

    public_methods = ("get",)
    carousel = CarouselRepository()

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            item = self.carousel.get(pk)
        except Carousel.DoesNotExist:
            return JsonResponse({"error": CAROUSEL_NOT_FOUND}, status=404)
        if not item.is_active and not request.user.is_authenticated:
            return JsonResponse({"error": CAROUSEL_NOT_FOUND}, status=404)
        return JsonResponse({"carouselItem": serialize_carousel(item)})

    def patch(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        try:
            item = self.carousel.get(pk)
        except Carousel.DoesNotExist:
            return JsonResponse({"error": CAROUSEL_NOT_FOUND}, status=404)

        fields, errors = clean_carousel(data, partial=True)
        if errors:
            return validation_failed(errors)

        try:
            item = self.carousel.update(item, fields)
        except DatabaseError:
            logger.exception("Failed to update carousel item #%d", pk)
            return server_error("Failed to update carousel item")
        return JsonResponse({"carousel": serialize_carousel(item)})

    def delete(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            item = self.carousel.get(pk)
        except Carousel.DoesNotExist:
            return JsonResponse({"error": CAROUSEL_NOT_FOUND}, status=404)

        try:
            self.carousel.delete(item)
        except DatabaseError:
            logger.exception("Failed to delete carousel item #%d", pk)
            return server_error("Failed to delete carousel item")
        return JsonResponse({"message": "Carousel item deleted"})


@method_decorator(csrf_exempt, name="dispatch")
class CarouselReorderView(SessionRequiredMixin, View):
    """Admin: move a banner one step up or down by swapping with its neighbour."""

    carousel = CarouselRepository()

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        pk = parse_id(data.get("id"))
        direction = data.get("direction")
        if pk is None or direction not in ("up", "down"):
            return JsonResponse({"error": "Invalid request parameters"}, status=400)

        try:
            swapped = self.carousel.swap(pk, direction)
        except Carousel.DoesNotExist:
            return JsonResponse({"error": CAROUSEL_NOT_FOUND}, status=404)
        except DatabaseError:
            logger.exception("Failed to reorder carousel item #%d", pk)
            return server_error("Failed to reorder carousel items")

        if swapped is None:
            return JsonResponse({"message": "Cannot move further, boundary reached"}, status=400)
        return JsonResponse({"message": "Order updated"})


# ─────────────────────────────── Documents ───────────────────────────────────


class DocumentListView(View):
    """Public: active documents filtered by category and/or project."""

    documents = DocumentRepository()

    def get(self, request: HttpRequest) -> JsonResponse:
        filters = DocumentFilter.from_query(request.GET, active_only=True)
        try:
            documents = self.documents.find(filters)
        except DatabaseError:
            logger.exception("Failed to list documents")
            return server_error("Failed to fetch documents")
        return JsonResponse({"documents": [serialize_document(d) for d in documents]})


class DocumentDetailView(View):
    """Single document; inactive ones are only visible with a session."""

    documents = DocumentRepository()

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            document = self.documents.get(pk)
        except Document.DoesNotExist:
            return JsonResponse({"error": DOCUMENT_NOT_FOUND}, status=404)

        if not document.is_active and not request.user.is_authenticated:
            return JsonResponse({"error": "Document is not available"}, status=403)
        return JsonResponse({"document": serialize_document(document)})


class DocumentDownloadView(View):
    """Count a download, then redirect to the stored file."""

    documents = DocumentRepository()

    def get(self, request: HttpRequest, pk: int) -> HttpResponse:
        try:
            document = self.documents.get(pk)
        except Document.DoesNotExist:
            return JsonResponse({"error": DOCUMENT_NOT_FOUND}, status=404)
        if not document.is_active:
            return JsonResponse({"error": DOCUMENT_NOT_FOUND}, status=404)

        self.documents.record_download(document.pk)
        return HttpResponseRedirect(document.file_url)


@method_decorator(csrf_exempt, name="dispatch")
class DocumentAdminView(SessionRequiredMixin, View):
    """Admin CRUD for documents; ids travel in the body (PATCH) or query (DELETE)."""

    documents = DocumentRepository()

    def get(self, request: HttpRequest) -> JsonResponse:
        filters = DocumentFilter.from_query(request.GET, active_only=False)
        try:
            documents = self.documents.find(filters)
        except DatabaseError:
            logger.exception("Failed to list documents for admin")
            return server_error("Failed to fetch documents")
        return JsonResponse({"documents": [serialize_document(d) for d in documents]})

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_document(data)
        project_id = fields.get("project_id")
        if not errors and project_id is not None and not self.documents.project_exists(project_id):
            errors["projectId"] = "Unknown project."
        if errors:
            return validation_failed(errors)

        try:
            document = self.documents.create(**fields)
        except DatabaseError:
            logger.exception("Failed to create document %r", fields.get("title"))
            return server_error("Failed to create document")
        document = self.documents.get(document.pk)
        return JsonResponse({"document": serialize_document(document), "message": "Document created"}, status=201)

    def patch(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        pk = parse_id(data.get("id"))
        if pk is None:
            return JsonResponse({"error": "Missing document id"}, status=400)

        try:
            document = self.documents.get(pk)
        except Document.DoesNotExist:
            return JsonResponse({"error": DOCUMENT_NOT_FOUND}, status=404)

        fields, errors = clean_document(data, partial=True)
        project_id = fields.get("project_id")
        if not errors and project_id is not None and not self.documents.project_exists(project_id):
            errors["projectId"] = "Unknown project."
        if errors:
            return validation_failed(errors)

        try:
            self.documents.update(document, fields)
        except IntegrityError:
            return validation_failed({"projectId": "Unknown project."})
        except DatabaseError:
            logger.exception("Failed to update document #%d", pk)
            return server_error("Failed to update document")
        document = self.documents.get(pk)
        return JsonResponse({"document": serialize_document(document), "message": "Document updated"})

    def delete(self, request: HttpRequest) -> JsonResponse:
        pk = parse_id(request.GET.get("id"))
        if pk is None:
            return JsonResponse({"error": "Missing document id"}, status=400)

        try:
            document = self.documents.get(pk)
        except Document.DoesNotExist:
            return JsonResponse({"error": DOCUMENT_NOT_FOUND}, status=404)

        try:
            self.documents.delete(document)
        except DatabaseError:
            logger.exception("Failed to delete document #%d", pk)
            return server_error("Failed to delete document")
        return JsonResponse({"message": "Document deleted"})
