"""Showcase API URL configuration."""

from django.urls import path

from . import views

app_name = "showcase"

urlpatterns = [
    # Projects
    path("projects/", views.ProjectListView.as_view(), name="project_list"),
    path("projects/admin/", views.ProjectAdminView.as_view(), name="project_admin"),
    path("projects/reorder/", views.ProjectReorderView.as_view(), name="project_reorder"),
    path("projects/<int:pk>/", views.ProjectDetailView.as_view(), name="project_detail"),
    # Carousel
    path("carousel/", views.CarouselListView.as_view(), name="carousel_list"),
    path("carousel/admin/", views.CarouselAdminView.as_view(), name="carousel_admin"),
    path("carousel/reorder/", views.CarouselReorderView.as_view(), name="carousel_reorder"),
    path("carousel/<int:pk>/", views.CarouselDetailView.as_view(), name="carousel_detail"),
    # Documents
    path("documents/", views.DocumentListView.as_view(), name="document_list"),
    path("documents/admin/", views.DocumentAdminView.as_view(), name="document_admin"),
    path("documents/<int:pk>/", views.DocumentDetailView.as_view(), name="document_detail"),
    path("documents/<int:pk>/download/", views.DocumentDownloadView.as_view(), name="document_download"),
]
