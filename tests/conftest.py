"""Pytest configuration for Banglong tests."""

import pytest
from django.core.cache import cache
from django.test import Client

from apps.accounts.models import User
from apps.showcase.models import Carousel, Document, Project


@pytest.fixture(autouse=True)
def _clear_cache():
    """CAPTCHA challenges live in the cache; start every test empty."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def admin_user(db) -> User:
    """Create an admin-role user."""
    return User.objects.create_user(
        email="admin@banglong.test",
        password="testpass123",
        name="Site Admin",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def editor_user(db) -> User:
    """Create an editor-role user."""
    return User.objects.create_user(
        email="editor@banglong.test",
        password="testpass123",
        name="Content Editor",
        role=User.Role.EDITOR,
    )


@pytest.fixture
def admin_client(admin_user: User) -> Client:
    """Return a client signed in as the admin."""
    client = Client()
    client.force_login(admin_user)
    return client


@pytest.fixture
def editor_client(editor_user: User) -> Client:
    """Return a client signed in as the editor."""
    client = Client()
    client.force_login(editor_user)
    return client


@pytest.fixture
def project(db) -> Project:
    return Project.objects.create(
        title="Riverside Residences",
        description="Twelve-storey residential tower.",
        category=Project.Category.NEW,
        image_url="https://cdn.banglong.test/riverside.jpg",
        details={"items": [{"label": "Floors", "value": "12"}]},
        order=1,
    )


@pytest.fixture
def document(project: Project) -> Document:
    return Document.objects.create(
        title="Handover handbook",
        file_url="https://cdn.banglong.test/handbook.pdf",
        file_type="pdf",
        category="handbook",
        order=1,
        project=project,
    )


@pytest.fixture
def carousel_items(db) -> list[Carousel]:
    return [
        Carousel.objects.create(
            title=f"Banner {n}",
            image_url=f"https://cdn.banglong.test/banner-{n}.jpg",
            order=n,
        )
        for n in (1, 2, 3)
    ]
