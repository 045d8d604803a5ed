"""Admin configuration for showcase content."""

from django.contrib import admin

from .models import Carousel, Document, Project


class DocumentInline(admin.TabularInline):
    model = Document
    fields = ("title", "category", "file_type", "file_url", "order", "is_active", "download_count")
    readonly_fields = ("download_count",)
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin view for Project model."""

    list_display = ("title", "category", "order", "is_active", "updated_at")
    list_filter = ("category", "is_active")
    list_editable = ("order", "is_active")
    search_fields = ("title", "description")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("category", "order")
    inlines = (DocumentInline,)


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    """Admin view for Document model."""

    list_display = ("title", "category", "file_type", "project", "order", "is_active", "download_count")
    list_filter = ("category", "file_type", "is_active")
    search_fields = ("title", "description", "file_url")
    readonly_fields = ("download_count", "created_at", "updated_at")
    ordering = ("category", "order")
    raw_id_fields = ("project",)


@admin.register(Carousel)
class CarouselAdmin(admin.ModelAdmin):
    """Admin view for Carousel model."""

    list_display = ("__str__", "order", "is_active", "text_position", "text_direction")
    list_filter = ("is_active", "text_position", "text_direction")
    list_editable = ("order", "is_active")
    search_fields = ("title", "link_text")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("order",)
