"""Initial migration for showcase app - Project, Document and Carousel models."""

import django.db.models.deletion
from django.db import migrations, models

import apps.showcase.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "category",
                    models.CharField(
                        choices=[("new", "New Projects"), ("classic", "Classic Works"), ("future", "Future Plans")],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                ("image_url", models.URLField(max_length=1024, verbose_name="image URL")),
                (
                    "details",
                    models.JSONField(
                        blank=True,
                        default=apps.showcase.models.default_project_details,
                        help_text='{"items": [{"label", "value"}], "features": [], "description": "", "additionalImages": []}',
                    ),
                ),
                ("order", models.PositiveIntegerField(db_index=True, default=0)),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "project",
                "verbose_name_plural": "projects",
                "ordering": ["category", "order"],
            },
        ),
        migrations.CreateModel(
            name="Document",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("file_url", models.URLField(max_length=1024, verbose_name="file URL")),
                ("file_type", models.CharField(help_text="pdf, docx, ...", max_length=20)),
                ("category", models.CharField(db_index=True, help_text="handbook, service, ...", max_length=100)),
                ("order", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("download_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "project",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="documents",
                        to="showcase.project",
                    ),
                ),
            ],
            options={
                "verbose_name": "document",
                "verbose_name_plural": "documents",
                "ordering": ["category", "order"],
            },
        ),
        migrations.CreateModel(
            name="Carousel",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(blank=True, default="", max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("image_url", models.URLField(max_length=1024, verbose_name="image URL")),
                ("link_url", models.CharField(blank=True, default="", max_length=1024, verbose_name="link URL")),
                ("link_text", models.CharField(blank=True, default="", max_length=255)),
                ("order", models.PositiveIntegerField(db_index=True, default=0)),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                (
                    "text_position",
                    models.CharField(
                        choices=[
                            ("topLeft", "Top left"),
                            ("topCenter", "Top center"),
                            ("topRight", "Top right"),
                            ("centerLeft", "Center left"),
                            ("center", "Center"),
                            ("centerRight", "Center right"),
                            ("bottomLeft", "Bottom left"),
                            ("bottomCenter", "Bottom center"),
                            ("bottomRight", "Bottom right"),
                        ],
                        default="center",
                        max_length=20,
                    ),
                ),
                (
                    "text_direction",
                    models.CharField(
                        choices=[("horizontal", "Horizontal"), ("vertical", "Vertical")],
                        default="horizontal",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "carousel item",
                "verbose_name_plural": "carousel items",
                "ordering": ["order"],
            },
        ),
    ]
