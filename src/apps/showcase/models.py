"""Showcase models: projects, downloadable documents and homepage carousel."""

from typing import ClassVar

from django.db import models


def default_project_details() -> dict:
    return {"items": []}


class Project(models.Model):
    """A construction project shown on the public site."""

    class Category(models.TextChoices):
        """Showcase sections."""

        NEW = "new", "New Projects"
        CLASSIC = "classic", "Classic Works"
        FUTURE = "future", "Future Plans"

    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    category = models.CharField(max_length=20, choices=Category.choices, db_index=True)
    image_url = models.URLField("image URL", max_length=1024)
    details = models.JSONField(
        default=default_project_details,
        blank=True,
        help_text='{"items": [{"label", "value"}], "features": [], "description": "", "additionalImages": []}',
    )
    order = models.PositiveIntegerField(default=0, db_index=True)
    is_active = models.BooleanField("active", default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["category", "order"]
        verbose_name = "project"
        verbose_name_plural = "projects"

    def __str__(self) -> str:
        return f"{self.title} ({self.category})"


class Document(models.Model):
    """A downloadable file such as a handover handbook or service guide."""

    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    file_url = models.URLField("file URL", max_length=1024)
    file_type = models.CharField(max_length=20, help_text="pdf, docx, ...")
    category = models.CharField(max_length=100, db_index=True, help_text="handbook, service, ...")
    order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField("active", default=True)
    project = models.ForeignKey(
        Project,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="documents",
    )
    download_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["category", "order"]
        verbose_name = "document"
        verbose_name_plural = "documents"

    def __str__(self) -> str:
        return self.title


class Carousel(models.Model):
    """A promotional banner on the homepage."""

    class TextPosition(models.TextChoices):
        """Where the caption sits on the banner."""

        TOP_LEFT = "topLeft", "Top left"
        TOP_CENTER = "topCenter", "Top center"
        TOP_RIGHT = "topRight", "Top right"
        CENTER_LEFT = "centerLeft", "Center left"
        CENTER = "center", "Center"
        CENTER_RIGHT = "centerRight", "Center right"
        BOTTOM_LEFT = "bottomLeft", "Bottom left"
        BOTTOM_CENTER = "bottomCenter", "Bottom center"
        BOTTOM_RIGHT = "bottomRight", "Bottom right"

    class TextDirection(models.TextChoices):
        """Caption writing direction."""

        HORIZONTAL = "horizontal", "Horizontal"
        VERTICAL = "vertical", "Vertical"

    title = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    image_url = models.URLField("image URL", max_length=1024)
    link_url = models.CharField("link URL", max_length=1024, blank=True, default="")
    link_text = models.CharField(max_length=255, blank=True, default="")
    order = models.PositiveIntegerField(default=0, db_index=True)
    is_active = models.BooleanField("active", default=True)
    text_position = models.CharField(max_length=20, choices=TextPosition.choices, default=TextPosition.CENTER)
    text_direction = models.CharField(max_length=20, choices=TextDirection.choices, default=TextDirection.HORIZONTAL)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["order"]
        verbose_name = "carousel item"
        verbose_name_plural = "carousel items"

    def __str__(self) -> str:
        return self.title or f"Carousel #{self.pk}"
