"""Tests for the site settings key-value API."""

import json

import pytest
from django.test import Client
from django.urls import reverse

from apps.core.models import SiteSettings


@pytest.fixture
def seo_settings(db) -> list[SiteSettings]:
    return [
        SiteSettings.objects.create(type="seo", key="title", value="Banglong Construction"),
        SiteSettings.objects.create(type="seo", key="keywords", value=json.dumps(["build", "homes"])),
        SiteSettings.objects.create(type="email", key="receivers", value="team@banglong.test"),
    ]


@pytest.mark.django_db
class TestSettingsRead:
    """Public GET /api/settings/."""

    def test_grouped_and_decoded(self, client: Client, seo_settings) -> None:
        response = client.get(reverse("core:settings"))
        assert response.status_code == 200
        body = response.json()
        assert body["settings"]["seo"] == {"title": "Banglong Construction", "keywords": ["build", "homes"]}
        assert body["settings"]["email"] == {"receivers": "team@banglong.test"}
        assert len(body["raw"]) == 3

    def test_filter_by_type(self, client: Client, seo_settings) -> None:
        body = client.get(reverse("core:settings"), {"type": "email"}).json()
        assert list(body["settings"]) == ["email"]


@pytest.mark.django_db
class TestSettingsWrite:
    """Session-gated POST, PUT and DELETE."""

    def test_post_upserts(self, admin_client: Client, seo_settings) -> None:
        response = admin_client.post(
            reverse("core:settings"),
            {"type": "seo", "key": "title", "value": "Banglong | Homes", "description": "Page title"},
            content_type="application/json",
        )
        assert response.status_code == 200
        setting = SiteSettings.objects.get(type="seo", key="title")
        assert setting.value == "Banglong | Homes"
        assert setting.description == "Page title"
        assert SiteSettings.objects.count() == 3

    def test_post_stores_objects_as_json(self, admin_client: Client) -> None:
        admin_client.post(
            reverse("core:settings"),
            {"type": "seo", "key": "ogImage", "value": {"url": "https://x/og.jpg", "width": 1200}},
            content_type="application/json",
        )
        setting = SiteSettings.objects.get(type="seo", key="ogImage")
        assert json.loads(setting.value) == {"url": "https://x/og.jpg", "width": 1200}

    def test_post_missing_fields(self, admin_client: Client) -> None:
        response = admin_client.post(reverse("core:settings"), {"type": "seo"}, content_type="application/json")
        assert response.status_code == 400
        assert set(response.json()["details"]) == {"key", "value"}

    def test_put_batch(self, admin_client: Client, seo_settings) -> None:
        response = admin_client.put(
            reverse("core:settings"),
            {
                "settings": [
                    {"type": "seo", "key": "title", "value": "New title"},
                    {"type": "seo", "key": "description", "value": "Quality homes since 1985"},
                ]
            },
            content_type="application/json",
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        assert SiteSettings.objects.get(type="seo", key="title").value == "New title"
        assert SiteSettings.objects.filter(type="seo").count() == 3

    def test_put_invalid_entry_writes_nothing(self, admin_client: Client, seo_settings) -> None:
        response = admin_client.put(
            reverse("core:settings"),
            {"settings": [{"type": "seo", "key": "title", "value": "New title"}, {"type": "seo"}]},
            content_type="application/json",
        )
        assert response.status_code == 400
        assert SiteSettings.objects.get(type="seo", key="title").value == "Banglong Construction"

    def test_delete(self, admin_client: Client, seo_settings) -> None:
        response = admin_client.delete(f"{reverse('core:settings')}?type=seo&key=title")
        assert response.status_code == 200
        assert not SiteSettings.objects.filter(type="seo", key="title").exists()

    def test_delete_unknown(self, admin_client: Client, db) -> None:
        response = admin_client.delete(f"{reverse('core:settings')}?type=seo&key=missing")
        assert response.status_code == 404

    def test_delete_missing_params(self, admin_client: Client, db) -> None:
        assert admin_client.delete(f"{reverse('core:settings')}?type=seo").status_code == 400

    def test_writes_require_session(self, client: Client, seo_settings) -> None:
        response = client.post(
            reverse("core:settings"), {"type": "seo", "key": "title", "value": "x"}, content_type="application/json"
        )
        assert response.status_code == 401
        assert client.delete(f"{reverse('core:settings')}?type=seo&key=title").status_code == 401
        assert SiteSettings.objects.get(type="seo", key="title").value == "Banglong Construction"
