"""Tests for the homepage carousel API."""

import pytest
from django.test import Client
from django.urls import reverse

from apps.showcase.models import Carousel


def _orders() -> dict[str, int]:
    return dict(Carousel.objects.values_list("title", "order"))


@pytest.mark.django_db
class TestCarouselCrud:
    """Create, read, update and delete banners."""

    def test_create_defaults(self, admin_client: Client, carousel_items: list[Carousel]) -> None:
        response = admin_client.post(
            reverse("showcase:carousel_list"),
            {"title": "Spring sale", "imageUrl": "https://cdn.banglong.test/spring.jpg"},
            content_type="application/json",
        )
        assert response.status_code == 201
        body = response.json()["carousel"]
        assert body["order"] == 4
        assert body["textPosition"] == "center"
        assert body["textDirection"] == "horizontal"
        assert body["isActive"] is True

    def test_create_requires_image(self, admin_client: Client) -> None:
        response = admin_client.post(
            reverse("showcase:carousel_list"), {"title": "No image"}, content_type="application/json"
        )
        assert response.status_code == 400
        assert "imageUrl" in response.json()["details"]

    def test_create_rejects_unknown_position(self, admin_client: Client) -> None:
        response = admin_client.post(
            reverse("showcase:carousel_list"),
            {"imageUrl": "https://x/y.jpg", "textPosition": "middle"},
            content_type="application/json",
        )
        assert response.status_code == 400

    def test_create_requires_session(self, client: Client) -> None:
        response = client.post(
            reverse("showcase:carousel_list"), {"imageUrl": "https://x/y.jpg"}, content_type="application/json"
        )
        assert response.status_code == 401
        assert Carousel.objects.count() == 0

    def test_public_list_hides_inactive(self, client: Client, carousel_items: list[Carousel]) -> None:
        carousel_items[1].is_active = False
        carousel_items[1].save()
        response = client.get(reverse("showcase:carousel_list"))
        assert [i["title"] for i in response.json()["carouselItems"]] == ["Banner 1", "Banner 3"]

    def test_admin_list_shows_all(self, admin_client: Client, carousel_items: list[Carousel]) -> None:
        Carousel.objects.filter(pk=carousel_items[0].pk).update(is_active=False)
        response = admin_client.get(reverse("showcase:carousel_admin"))
        assert len(response.json()["carouselItems"]) == 3

    def test_detail_and_patch(self, admin_client: Client, carousel_items: list[Carousel]) -> None:
        item = carousel_items[0]
        response = admin_client.patch(
            reverse("showcase:carousel_detail", args=[item.pk]),
            {"textPosition": "bottomRight", "textDirection": "vertical"},
            content_type="application/json",
        )
        assert response.status_code == 200

        response = admin_client.get(reverse("showcase:carousel_detail", args=[item.pk]))
        body = response.json()["carouselItem"]
        assert body["textPosition"] == "bottomRight"
        assert body["textDirection"] == "vertical"
        assert body["title"] == "Banner 1"

    def test_delete(self, admin_client: Client, carousel_items: list[Carousel]) -> None:
        response = admin_client.delete(reverse("showcase:carousel_detail", args=[carousel_items[2].pk]))
        assert response.status_code == 200
        assert Carousel.objects.count() == 2

    def test_detail_not_found(self, client: Client, db) -> None:
        assert client.get(reverse("showcase:carousel_detail", args=[42])).status_code == 404

    def test_inactive_detail_hidden_from_anonymous(
        self, client: Client, admin_client: Client, carousel_items: list[Carousel]
    ) -> None:
        item = carousel_items[1]
        Carousel.objects.filter(pk=item.pk).update(is_active=False)
        url = reverse("showcase:carousel_detail", args=[item.pk])

        assert client.get(url).status_code == 404
        assert admin_client.get(url).status_code == 200


@pytest.mark.django_db
class TestCarouselReorder:
    """POST /api/carousel/reorder/ swaps with the nearest neighbour."""

    def _move(self, client: Client, item: Carousel, direction: str):
        return client.post(
            reverse("showcase:carousel_reorder"),
            {"id": item.pk, "direction": direction},
            content_type="application/json",
        )

    def test_move_up_swaps_orders(self, admin_client: Client, carousel_items: list[Carousel]) -> None:
        response = self._move(admin_client, carousel_items[1], "up")
        assert response.status_code == 200
        assert response.json() == {"message": "Order updated"}
        assert _orders() == {"Banner 1": 2, "Banner 2": 1, "Banner 3": 3}

    def test_move_down_skips_gaps(self, admin_client: Client, carousel_items: list[Carousel]) -> None:
        Carousel.objects.filter(pk=carousel_items[2].pk).update(order=10)
        response = self._move(admin_client, carousel_items[1], "down")
        assert response.status_code == 200
        assert _orders() == {"Banner 1": 1, "Banner 2": 10, "Banner 3": 2}

    @pytest.mark.parametrize(("index", "direction"), [(0, "up"), (2, "down")])
    def test_boundary_is_rejected(
        self, admin_client: Client, carousel_items: list[Carousel], index: int, direction: str
    ) -> None:
        response = self._move(admin_client, carousel_items[index], direction)
        assert response.status_code == 400
        assert response.json() == {"message": "Cannot move further, boundary reached"}
        assert _orders() == {"Banner 1": 1, "Banner 2": 2, "Banner 3": 3}

    def test_invalid_direction(self, admin_client: Client, carousel_items: list[Carousel]) -> None:
        assert self._move(admin_client, carousel_items[0], "left").status_code == 400

    def test_unknown_item(self, admin_client: Client, db) -> None:
        response = admin_client.post(
            reverse("showcase:carousel_reorder"), {"id": 999, "direction": "up"}, content_type="application/json"
        )
        assert response.status_code == 404

    def test_requires_session(self, client: Client, carousel_items: list[Carousel]) -> None:
        assert self._move(client, carousel_items[1], "up").status_code == 401
        assert _orders() == {"Banner 1": 1, "Banner 2": 2, "Banner 3": 3}
