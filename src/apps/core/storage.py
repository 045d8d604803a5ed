"""Blob storage client for admin uploads."""

import asyncio
import json
import logging
import posixpath
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.utils.text import get_valid_filename

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The blob store rejected the upload or could not be reached."""


class StorageNotConfigured(StorageError):
    """No blob storage token is configured."""


def clean_pathname(filename: str) -> str:
    """Turn a client-supplied name into a safe ``dir/name.ext`` object path."""
    parts = [p for p in posixpath.normpath(filename.replace("\\", "/")).split("/") if p not in ("", ".", "..")]
    cleaned = []
    for part in parts:
        try:
            cleaned.append(get_valid_filename(part))
        except SuspiciousFileOperation:
            continue
    return "/".join(cleaned)


def put_blob(pathname: str, content: bytes, content_type: str = "application/octet-stream") -> dict:
    """
    Store ``content`` publicly under ``pathname``.

    Returns:
        ``{"url", "pathname", "contentType"}`` as reported by the store.

    """
    token = settings.BLOB_READ_WRITE_TOKEN
    if not token:
        raise StorageNotConfigured("Blob storage token is not configured")

    url = f"{settings.BLOB_STORAGE_URL.rstrip('/')}/{quote(pathname)}"
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": content_type,
        "x-content-type": content_type,
        "x-api-version": "7",
    }
    req = Request(url, data=content, headers=headers, method="PUT")  # noqa: S310
    try:
        with urlopen(req, timeout=60) as response:  # noqa: S310
            data = json.loads(response.read())
    except HTTPError as exc:
        body = exc.read().decode(errors="replace")
        logger.error("Blob storage PUT %s returned HTTP %s: %s", pathname, exc.code, body[:500])
        raise StorageError(f"Blob storage error {exc.code}") from exc
    except (URLError, TimeoutError) as exc:
        raise StorageError("Blob storage unreachable") from exc
    except (json.JSONDecodeError, ValueError) as exc:
        raise StorageError("Blob storage returned an invalid response") from exc

    if not data.get("url"):
        raise StorageError("Blob storage response has no url")
    return {
        "url": data["url"],
        "pathname": data.get("pathname", pathname),
        "contentType": data.get("contentType", content_type),
    }


async def upload_blob(pathname: str, content: bytes, content_type: str = "application/octet-stream") -> dict:
    """Run :func:`put_blob` in the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: put_blob(pathname, content, content_type))
