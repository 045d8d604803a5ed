"""Core app services: outbound mail built from site settings."""

import asyncio
import logging
import re
from functools import partial
from urllib.parse import urlencode

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.defaultfilters import linebreaksbr

from .models import ContactSubmission
from .repositories import SiteSettingsRepository

logger = logging.getLogger(__name__)

site_settings = SiteSettingsRepository()

_PLACEHOLDER = re.compile(r"{{\s*(\w+)\s*}}")


def render_template(template: str, context: dict) -> str:
    """Replace ``{{name}}``-style placeholders; unknown ones become empty."""
    return _PLACEHOLDER.sub(lambda m: str(context.get(m.group(1)) or ""), template)


def parse_recipients(value) -> list[str]:
    """Accept a comma/semicolon separated string or a list of addresses."""
    if isinstance(value, list):
        candidates = value
    else:
        candidates = re.split(r"[,;]", str(value or ""))
    return [address.strip() for address in candidates if str(address).strip()]


async def get_notification_recipients() -> list[str]:
    """Recipients from the ``email.receivers`` setting, else CONTACT_NOTIFICATION_EMAILS."""
    configured = parse_recipients(await site_settings.aget_value("email", "receivers"))
    return configured or list(settings.CONTACT_NOTIFICATION_EMAILS)


async def _send(message: EmailMultiAlternatives) -> None:
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, partial(message.send, fail_silently=False))


async def relay_email(*, to: list[str], subject: str, text: str, html: str | None = None) -> None:
    """Send one message and let delivery errors propagate to the caller."""
    message = EmailMultiAlternatives(subject=subject, body=text, from_email=settings.DEFAULT_FROM_EMAIL, to=to)
    if html:
        message.attach_alternative(html, "text/html")
    await _send(message)


async def send_contact_notification(submission: ContactSubmission) -> bool:
    """Email the team about a new contact form submission. Best-effort."""
    try:
        recipients = await get_notification_recipients()
        if not recipients:
            logger.warning("No notification recipients configured, skipping notification.")
            return False

        context = {
            "name": submission.name,
            "email": submission.email,
            "phone": submission.phone,
            "message": submission.message,
        }
        template = await site_settings.aget_value("email", "notificationTemplate")
        if template:
            text_body = render_template(str(template), context)
        else:
            text_body = (
                f"New contact form submission received:\n\n"
                f"Name: {submission.name}\n"
                f"Email: {submission.email}\n"
                f"Phone: {submission.phone or 'Not provided'}\n"
                f"Message:\n{submission.message}\n\n"
                f"Submitted: {submission.created_at:%Y-%m-%d %H:%M}\n"
            )

        message = EmailMultiAlternatives(
            subject=f"New contact submission from {submission.name}",
            body=text_body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=recipients,
            reply_to=[f"{submission.name} <{submission.email}>"],
        )
        await _send(message)
        logger.info("Contact notification sent to %s for submission #%d", recipients, submission.pk)
        return True
    except Exception:
        logger.exception("Failed to send contact notification for submission #%d", submission.pk)
        return False


async def send_contact_reply(submission: ContactSubmission) -> bool:
    """Email the admin's reply to the person who submitted the form. Best-effort."""
    reply = submission.reply or ""
    text_body = f"Dear {submission.name},\n\n{reply}\n\nYour original message:\n{submission.message}\n"
    html_body = (
        f"<p>Dear {linebreaksbr(submission.name, autoescape=True)},</p>"
        f"<p>{linebreaksbr(reply, autoescape=True)}</p>"
        f"<hr><p>Your original message:</p>"
        f"<p>{linebreaksbr(submission.message, autoescape=True)}</p>"
    )
    try:
        await relay_email(
            to=[submission.email],
            subject="Re: your enquiry to Banglong Construction",
            text=text_body,
            html=html_body,
        )
        logger.info("Reply sent for contact submission #%d", submission.pk)
        return True
    except Exception:
        logger.exception("Failed to send reply for contact submission #%d", submission.pk)
        return False


def send_invitation(*, name: str, email: str, token: str) -> bool:
    """Invite a new admin panel user to set a password. Best-effort."""
    link = f"{settings.SITE_URL}/reset-password?{urlencode({'email': email, 'token': token})}"
    template = site_settings.get_value("email", "invitationTemplate")
    context = {"name": name, "email": email, "link": link}
    if template:
        text_body = render_template(str(template), context)
    else:
        text_body = (
            f"Hello {name},\n\n"
            f"You have been invited to the Banglong admin panel. Set your password here:\n{link}\n\n"
            f"This link is valid for 24 hours. If you did not expect this email, please ignore it.\n"
        )
    message = EmailMultiAlternatives(
        subject="Invitation to the Banglong admin panel",
        body=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[email],
    )
    try:
        message.send(fail_silently=False)
        logger.info("Invitation sent to %s", email)
        return True
    except Exception:
        logger.exception("Failed to send invitation to %s", email)
        return False
