"""Tests for the admin upload proxy and the blob storage client."""

import json
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.error import URLError

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client, override_settings
from django.urls import reverse

from apps.core import storage

BLOB = {
    "url": "https://blob.example.com/projects/site-plan.pdf",
    "pathname": "projects/site-plan.pdf",
    "contentType": "application/pdf",
}


def _upload(client: Client, filename: str | None = "projects/site-plan.pdf", file=True):
    url = reverse("core:upload")
    if filename is not None:
        url = f"{url}?filename={filename}"
    data = {}
    if file:
        data["file"] = SimpleUploadedFile("site-plan.pdf", b"%PDF-1.7 test", content_type="application/pdf")
    return client.post(url, data)


@pytest.mark.django_db
class TestUploadView:
    """POST /api/upload/."""

    @patch("apps.core.views.storage.upload_blob", new_callable=AsyncMock)
    def test_proxies_to_blob_storage(self, mock_upload: AsyncMock, admin_client: Client) -> None:
        mock_upload.return_value = BLOB

        response = _upload(admin_client)

        assert response.status_code == 200
        assert response.json() == BLOB
        mock_upload.assert_awaited_once_with("projects/site-plan.pdf", b"%PDF-1.7 test", "application/pdf")

    @patch("apps.core.views.storage.upload_blob", new_callable=AsyncMock)
    def test_missing_filename(self, mock_upload: AsyncMock, admin_client: Client) -> None:
        assert _upload(admin_client, filename=None).status_code == 400
        mock_upload.assert_not_awaited()

    @patch("apps.core.views.storage.upload_blob", new_callable=AsyncMock)
    def test_missing_file(self, mock_upload: AsyncMock, admin_client: Client) -> None:
        assert _upload(admin_client, file=False).status_code == 400
        mock_upload.assert_not_awaited()

    @override_settings(UPLOAD_MAX_BYTES=4)
    @patch("apps.core.views.storage.upload_blob", new_callable=AsyncMock)
    def test_too_large(self, mock_upload: AsyncMock, admin_client: Client) -> None:
        assert _upload(admin_client).status_code == 400
        mock_upload.assert_not_awaited()

    @patch("apps.core.views.storage.upload_blob", new_callable=AsyncMock)
    def test_storage_failure(self, mock_upload: AsyncMock, admin_client: Client) -> None:
        mock_upload.side_effect = storage.StorageError("Blob storage error 503")
        response = _upload(admin_client)
        assert response.status_code == 500
        assert response.json() == {"error": "Upload failed"}

    def test_requires_session(self, client: Client) -> None:
        assert _upload(client).status_code == 401


class TestCleanPathname:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("site plan.pdf", "site_plan.pdf"),
            ("projects/2024/render.jpg", "projects/2024/render.jpg"),
            ("../../etc/passwd", "etc/passwd"),
            ("..\\windows\\boot.ini", "windows/boot.ini"),
            ("", ""),
        ],
    )
    def test_cleaning(self, raw: str, expected: str) -> None:
        assert storage.clean_pathname(raw) == expected


class TestPutBlob:
    """The urllib client that talks to blob storage."""

    def _response(self, payload: dict) -> MagicMock:
        response = MagicMock()
        response.read.return_value = json.dumps(payload).encode()
        response.__enter__.return_value = response
        return response

    def test_put_request(self) -> None:
        with patch("apps.core.storage.urlopen", return_value=self._response(BLOB)) as mock_urlopen:
            result = storage.put_blob("projects/site-plan.pdf", b"data", "application/pdf")

        assert result == BLOB
        request = mock_urlopen.call_args.args[0]
        assert request.get_method() == "PUT"
        assert request.full_url == "https://blob.example.com/projects/site-plan.pdf"
        assert request.get_header("Authorization") == "Bearer blob-test-token"
        assert request.data == b"data"

    def test_unreachable(self) -> None:
        with patch("apps.core.storage.urlopen", side_effect=URLError("down")), pytest.raises(storage.StorageError):
            storage.put_blob("a.txt", b"data")

    def test_response_without_url(self) -> None:
        with patch("apps.core.storage.urlopen", return_value=self._response({})), pytest.raises(storage.StorageError):
            storage.put_blob("a.txt", b"data")

    @override_settings(BLOB_READ_WRITE_TOKEN="")
    def test_not_configured(self) -> None:
        with pytest.raises(storage.StorageNotConfigured):
            storage.put_blob("a.txt", b"data")
