"""Core app views: contact form, CAPTCHA, email relay, site settings and uploads."""

import logging

from django.conf import settings
from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.accounts.mixins import SessionRequiredMixin

from . import services, storage
from .captcha import captcha_data_url, captcha_store
from .filters import ContactFilter
from .http import InvalidPayload, invalid_payload, read_json, server_error, validation_failed
from .mail import MailRelayError
from .models import ContactSubmission
from .repositories import ContactSubmissionRepository, SiteSettingsRepository
from .serializers import group_settings, serialize_contact, serialize_setting
from .validators import clean_contact, clean_contact_update, clean_send_email, clean_setting

logger = logging.getLogger(__name__)

INVALID_CAPTCHA = "Invalid or expired captcha"
CONTACT_NOT_FOUND = "Contact submission not found"


class CaptchaView(View):
    """Issue a new single-use CAPTCHA challenge as an inline PNG."""

    def get(self, request: HttpRequest) -> JsonResponse:
        captcha_id, code = captcha_store.issue()
        response = JsonResponse({"success": True, "captchaId": captcha_id, "captchaImage": captcha_data_url(code)})
        response["Cache-Control"] = "no-store"
        return response


# ─────────────────────────────── Contacts ────────────────────────────────────


@method_decorator(csrf_exempt, name="dispatch")
class ContactSubmitView(View):
    """Handle public contact form submissions."""

    contacts = ContactSubmissionRepository()

    async def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_contact(data)
        if errors:
            return validation_failed(errors)

        if not await captcha_store.averify(data.get("captchaId"), data.get("captcha")):
            logger.info("Contact form rejected: invalid captcha from %s", fields["email"])
            return JsonResponse({"error": INVALID_CAPTCHA}, status=400)

        try:
            submission = await self.contacts.create(**fields)
        except DatabaseError:
            logger.exception("Failed to store contact submission from %s", fields["email"])
            return server_error("Failed to submit contact form")

        await services.send_contact_notification(submission)

        return JsonResponse(
            {"success": True, "message": "Thank you for reaching out! We'll get back to you soon.", "id": submission.pk},
            status=201,
        )


@method_decorator(csrf_exempt, name="dispatch")
class ContactAdminView(SessionRequiredMixin, View):
    """Admin: browse submissions, update their status and reply by email."""

    contacts = ContactSubmissionRepository()

    async def get(self, request: HttpRequest) -> JsonResponse:
        filters = ContactFilter.from_query(request.GET)
        try:
            items, total = await self.contacts.find(filters)
        except DatabaseError:
            logger.exception("Failed to list contact submissions")
            return server_error("Failed to fetch contact submissions")
        return JsonResponse(
            {
                "data": [serialize_contact(s) for s in items],
                "total": total,
                "limit": filters.limit,
                "offset": filters.offset,
            }
        )

    async def patch(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        pk, fields, errors = clean_contact_update(data)
        if errors:
            return validation_failed(errors)

        try:
            submission = await self.contacts.get(pk)
        except ContactSubmission.DoesNotExist:
            return JsonResponse({"error": CONTACT_NOT_FOUND}, status=404)

        previous_status, previous_reply = submission.status, submission.reply
        for attr, value in fields.items():
            setattr(submission, attr, value)

        try:
            await self.contacts.save(submission, list(fields))
        except DatabaseError:
            logger.exception("Failed to update contact submission #%d", pk)
            return server_error("Failed to update contact submission")

        if self._reply_is_due(submission, previous_status, previous_reply):
            if await services.send_contact_reply(submission):
                submission.replied_at = timezone.now()
                try:
                    await self.contacts.save(submission, ["replied_at"])
                except DatabaseError:
                    logger.exception("Reply sent but failed to record replied_at for contact submission #%d", pk)
                    submission.replied_at = None

        return JsonResponse({"success": True, "contact": serialize_contact(submission)})

    @staticmethod
    def _reply_is_due(submission: ContactSubmission, previous_status: str, previous_reply: str | None) -> bool:
        """A reply goes out once the submission is completed with a reply that wasn't already sent."""
        if submission.status != ContactSubmission.Status.COMPLETED or not submission.reply:
            return False
        return not (previous_status == ContactSubmission.Status.COMPLETED and previous_reply == submission.reply)


# ─────────────────────────────── Email relay ─────────────────────────────────


@method_decorator(csrf_exempt, name="dispatch")
class SendEmailView(View):
    """Public CAPTCHA-protected form that relays a message to the team."""

    async def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_send_email(data)
        if errors:
            return validation_failed(errors)

        if not await captcha_store.averify(fields["captcha_id"], fields["captcha"]):
            logger.info("Email form rejected: invalid captcha")
            return JsonResponse({"error": INVALID_CAPTCHA}, status=400)

        recipients = await services.get_notification_recipients()
        if not recipients:
            logger.error("No recipients configured for the email form")
            return server_error("Failed to send email")

        text = fields["body"]
        template = await services.site_settings.aget_value("email", "notificationTemplate")
        if template:
            text = services.render_template(
                str(template),
                {
                    "name": fields["name"],
                    "email": fields["email"],
                    "phone": fields["phone"],
                    "message": fields["message"] or fields["body"],
                },
            )

        try:
            await services.relay_email(to=recipients, subject=fields["subject"], text=text)
        except MailRelayError:
            logger.exception("Mail relay failed for subject %r", fields["subject"])
            return server_error("Failed to send email")

        return JsonResponse({"success": True, "message": "Email sent"})


# ─────────────────────────────── Site settings ───────────────────────────────


@method_decorator(csrf_exempt, name="dispatch")
class SettingsView(SessionRequiredMixin, View):
    """Read settings publicly; write them with a session."""

    public_methods = ("get",)
    site_settings = SiteSettingsRepository()

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            entries = self.site_settings.find(request.GET.get("type") or None)
        except DatabaseError:
            logger.exception("Failed to read site settings")
            return server_error("Failed to fetch settings")
        return JsonResponse({"settings": group_settings(entries), "raw": [serialize_setting(s) for s in entries]})

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_setting(data)
        if errors:
            return validation_failed(errors)

        try:
            setting = self.site_settings.upsert(
                fields["type"], fields["key"], fields["value"], fields.get("description")
            )
        except DatabaseError:
            logger.exception("Failed to save setting %s.%s", fields["type"], fields["key"])
            return server_error("Failed to save setting")
        logger.info("Setting %s updated by %s", setting, request.user)
        return JsonResponse({"success": True, "setting": serialize_setting(setting)})

    def put(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        entries = data.get("settings")
        if not isinstance(entries, list):
            return validation_failed({"settings": "Must be a list."})

        cleaned, errors = [], {}
        for index, entry in enumerate(entries):
            fields, entry_errors = clean_setting(entry)
            if entry_errors:
                errors[str(index)] = entry_errors
            cleaned.append(fields)
        if errors:
            return validation_failed(errors)

        try:
            results = self.site_settings.upsert_many(cleaned)
        except DatabaseError:
            logger.exception("Failed to save %d settings", len(cleaned))
            return server_error("Failed to save settings")
        return JsonResponse(
            {"success": True, "count": len(results), "results": [serialize_setting(s) for s in results]}
        )

    def delete(self, request: HttpRequest) -> JsonResponse:
        type_, key = request.GET.get("type"), request.GET.get("key")
        if not type_ or not key:
            return JsonResponse({"error": "Both type and key are required"}, status=400)

        try:
            deleted = self.site_settings.delete(type_, key)
        except DatabaseError:
            logger.exception("Failed to delete setting %s.%s", type_, key)
            return server_error("Failed to delete setting")
        if not deleted:
            return JsonResponse({"error": "Setting not found"}, status=404)
        return JsonResponse({"success": True})


# ─────────────────────────────── Uploads ─────────────────────────────────────


@method_decorator(csrf_exempt, name="dispatch")
class UploadView(SessionRequiredMixin, View):
    """Proxy an admin file upload to blob storage and return its public URL."""

    async def post(self, request: HttpRequest) -> JsonResponse:
        filename = storage.clean_pathname(request.GET.get("filename", ""))
        if not filename:
            return JsonResponse({"error": "Filename is required"}, status=400)

        upload = request.FILES.get("file")
        if upload is None:
            return JsonResponse({"error": "No file provided"}, status=400)

        if upload.size > settings.UPLOAD_MAX_BYTES:
            return JsonResponse({"error": "File is too large"}, status=400)

        content_type = upload.content_type or "application/octet-stream"
        try:
            blob = await storage.upload_blob(filename, upload.read(), content_type)
        except storage.StorageError:
            logger.exception("Upload of %s failed", filename)
            return server_error("Upload failed")

        logger.info("Uploaded %s (%d bytes) to %s", filename, upload.size, blob["url"])
        return JsonResponse(blob)
