"""Django email backend that delivers through the HTTP mail relay.

The relay accepts ``POST {to, subject, text}`` (plus ``html`` when the
message carries an HTML alternative) authenticated with an API key. Select
it with ``EMAIL_BACKEND = "apps.core.mail.MailRelayBackend"``.
"""

import json
import logging
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from django.conf import settings
from django.core.mail.backends.base import BaseEmailBackend

logger = logging.getLogger(__name__)


class MailRelayError(Exception):
    """The relay rejected a message or could not be reached."""


class MailRelayBackend(BaseEmailBackend):
    """Send each message as one JSON POST to ``MAIL_RELAY_URL``."""

    def __init__(self, fail_silently=False, url=None, api_key=None, timeout=None, **kwargs):
        super().__init__(fail_silently=fail_silently, **kwargs)
        self.url = url or settings.MAIL_RELAY_URL
        self.api_key = api_key or settings.MAIL_RELAY_API_KEY
        self.timeout = timeout or settings.MAIL_RELAY_TIMEOUT

    def send_messages(self, email_messages) -> int:
        sent = 0
        for message in email_messages:
            if not message.recipients():
                continue
            try:
                self._post(build_payload(message))
            except MailRelayError:
                if not self.fail_silently:
                    raise
                logger.warning("Mail relay dropped message %r", message.subject)
            else:
                sent += 1
        return sent

    def _post(self, payload: dict) -> None:
        if not self.url or not self.api_key:
            raise MailRelayError("Mail relay is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "x-api-key": self.api_key,
        }
        req = Request(self.url, data=json.dumps(payload).encode(), headers=headers, method="POST")  # noqa: S310
        try:
            with urlopen(req, timeout=self.timeout) as response:  # noqa: S310
                status = response.status
        except HTTPError as exc:
            body = exc.read().decode(errors="replace")
            logger.error("Mail relay returned HTTP %s: %s", exc.code, body[:500])
            raise MailRelayError(f"Mail relay error {exc.code}") from exc
        except (URLError, TimeoutError) as exc:
            logger.error("Mail relay unreachable: %s", exc)
            raise MailRelayError("Mail relay unreachable") from exc

        if not 200 <= status < 300:
            raise MailRelayError(f"Mail relay error {status}")
        logger.info("Mail relay accepted %r for %s", payload["subject"], payload["to"])


def build_payload(message) -> dict:
    """Flatten a Django ``EmailMessage`` into the relay's JSON shape."""
    payload = {
        "to": ", ".join(message.recipients()),
        "subject": message.subject,
        "text": message.body,
    }
    if message.from_email:
        payload["from"] = message.from_email
    if message.reply_to:
        payload["replyTo"] = ", ".join(message.reply_to)
    for content, mimetype in getattr(message, "alternatives", []):
        if mimetype == "text/html":
            payload["html"] = content
            break
    return payload
