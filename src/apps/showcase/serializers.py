"""JSON representations of the showcase models (camelCase keys)."""

from .models import Carousel, Document, Project


def serialize_project(project: Project, *, with_documents: bool = False, active_documents_only: bool = False) -> dict:
    data = {
        "id": project.pk,
        "title": project.title,
        "description": project.description,
        "category": project.category,
        "imageUrl": project.image_url,
        "details": project.details,
        "order": project.order,
        "isActive": project.is_active,
        "createdAt": project.created_at.isoformat(),
        "updatedAt": project.updated_at.isoformat(),
    }
    if with_documents:
        documents = project.documents.all()
        if active_documents_only:
            documents = [doc for doc in documents if doc.is_active]
        data["documents"] = [serialize_document(doc, with_project=False) for doc in documents]
    return data


def serialize_document(document: Document, *, with_project: bool = True) -> dict:
    data = {
        "id": document.pk,
        "title": document.title,
        "description": document.description,
        "fileUrl": document.file_url,
        "fileType": document.file_type,
        "category": document.category,
        "order": document.order,
        "isActive": document.is_active,
        "projectId": document.project_id,
        "downloadCount": document.download_count,
        "createdAt": document.created_at.isoformat(),
        "updatedAt": document.updated_at.isoformat(),
    }
    if with_project:
        project = document.project
        data["project"] = {"title": project.title, "imageUrl": project.image_url} if project else None
    return data


def serialize_carousel(item: Carousel) -> dict:
    return {
        "id": item.pk,
        "title": item.title,
        "description": item.description,
        "imageUrl": item.image_url,
        "linkUrl": item.link_url,
        "linkText": item.link_text,
        "order": item.order,
        "isActive": item.is_active,
        "textPosition": item.text_position,
        "textDirection": item.text_direction,
        "createdAt": item.created_at.isoformat(),
        "updatedAt": item.updated_at.isoformat(),
    }
