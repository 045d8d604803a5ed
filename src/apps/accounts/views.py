"""Session login and user management for the admin panel."""

import logging
import secrets

from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.db import DatabaseError, IntegrityError
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.core.http import (
    InvalidPayload,
    clean_str,
    invalid_payload,
    parse_id,
    read_json,
    server_error,
    validation_failed,
)
from apps.core.services import send_invitation

from .mixins import SessionRequiredMixin
from .models import User
from .serializers import serialize_user
from .validators import REQUIRED, clean_new_password, clean_user

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
EMAIL_TAKEN = "A user with this email already exists"


@method_decorator(csrf_exempt, name="dispatch")
class LoginView(View):
    """Exchange email and password for a signed session cookie."""

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        email, password = clean_str(data.get("email")).lower(), data.get("password") or ""
        errors = {key: REQUIRED for key, value in (("email", email), ("password", password)) if not value}
        if errors:
            return validation_failed(errors)

        user = authenticate(request, username=email, password=password)
        if user is None:
            logger.info("Failed login attempt for %s", email)
            return JsonResponse({"error": "Invalid email or password"}, status=401)

        login(request, user)
        logger.info("User %s signed in", user)
        return JsonResponse({"user": serialize_user(user)})


@method_decorator(csrf_exempt, name="dispatch")
class LogoutView(View):
    def post(self, request: HttpRequest) -> JsonResponse:
        logout(request)
        return JsonResponse({"success": True})


class SessionView(SessionRequiredMixin, View):
    """The signed-in user, or 401."""

    def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse({"user": serialize_user(request.user)})


@method_decorator(csrf_exempt, name="dispatch")
class UsersView(SessionRequiredMixin, View):
    """Admin-role only: list, invite, update and remove panel users."""

    required_role = "admin"

    def get(self, request: HttpRequest) -> JsonResponse:
        users = User.objects.order_by("-date_joined", "-id")
        return JsonResponse({"data": [serialize_user(u) for u in users]})

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_user(data)
        if errors:
            return validation_failed(errors)
        if User.objects.filter(email__iexact=fields["email"]).exists():
            return JsonResponse({"error": EMAIL_TAKEN}, status=400)

        # Invited users never learn this password; they set their own via the reset link
        user = User(username=fields["email"], email=fields["email"], name=fields["name"], role=fields["role"])
        user.set_password(secrets.token_urlsafe(16))
        token = user.issue_reset_token()
        try:
            user.save()
        except IntegrityError:
            return JsonResponse({"error": EMAIL_TAKEN}, status=400)
        except DatabaseError:
            logger.exception("Failed to create user %s", fields["email"])
            return server_error("Failed to create user")

        send_invitation(name=user.name, email=user.email, token=token)
        logger.info("User %s invited by %s", user, request.user)
        return JsonResponse({"message": "User created and invitation sent", "data": serialize_user(user)})

    def put(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        fields, errors = clean_user(data, require_id=True)
        if errors:
            return validation_failed(errors)

        try:
            user = User.objects.get(pk=fields["id"])
        except User.DoesNotExist:
            return JsonResponse({"error": USER_NOT_FOUND}, status=404)
        if User.objects.filter(email__iexact=fields["email"]).exclude(pk=user.pk).exists():
            return JsonResponse({"error": EMAIL_TAKEN}, status=400)

        user.name = fields["name"]
        user.email = user.username = fields["email"]
        user.role = fields["role"]
        if "password" in fields:
            user.set_password(fields["password"])
        try:
            user.save()
        except DatabaseError:
            logger.exception("Failed to update user #%d", user.pk)
            return server_error("Failed to update user")
        return JsonResponse({"message": "User updated", "data": serialize_user(user)})

    def delete(self, request: HttpRequest) -> JsonResponse:
        pk = parse_id(request.GET.get("id"))
        if pk is None:
            return JsonResponse({"error": "User id is required"}, status=400)
        if pk == request.user.pk:
            return JsonResponse({"error": "You cannot delete your own account"}, status=400)

        deleted, _ = User.objects.filter(pk=pk).delete()
        if not deleted:
            return JsonResponse({"error": USER_NOT_FOUND}, status=404)
        logger.info("User #%d deleted by %s", pk, request.user)
        return JsonResponse({"message": "User deleted"})


@method_decorator(csrf_exempt, name="dispatch")
class ChangePasswordView(SessionRequiredMixin, View):
    """Any signed-in user replaces their own password."""

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        old_password = data.get("oldPassword") or ""
        new_password = data.get("newPassword")
        errors = {}
        if not old_password:
            errors["oldPassword"] = REQUIRED
        if problem := clean_new_password(new_password):
            errors["newPassword"] = problem
        if errors:
            return validation_failed(errors)

        user = request.user
        if not user.check_password(old_password):
            return JsonResponse({"error": "Current password is incorrect"}, status=400)

        user.set_password(new_password)
        user.has_changed_password = True
        user.save(update_fields=["password", "has_changed_password"])
        update_session_auth_hash(request, user)
        return JsonResponse({"message": "Password updated"})


@method_decorator(csrf_exempt, name="dispatch")
class ResetPasswordView(View):
    """Set a password from an invitation or reset link."""

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = read_json(request)
        except InvalidPayload as exc:
            return invalid_payload(exc)

        email = clean_str(data.get("email")).lower()
        token = clean_str(data.get("token"))
        password = data.get("password")
        errors = {key: REQUIRED for key, value in (("email", email), ("token", token)) if not value}
        if problem := clean_new_password(password):
            errors["password"] = problem
        if errors:
            return validation_failed(errors)

        user = User.objects.filter(email__iexact=email).first()
        if user is None or not user.reset_token_is_valid(token):
            return JsonResponse({"error": "Invalid or expired reset link"}, status=400)

        user.set_password(password)
        user.has_changed_password = True
        user.clear_reset_token()
        user.save(update_fields=["password", "has_changed_password", "reset_token", "reset_token_expiry"])
        logger.info("Password reset for %s", user)
        return JsonResponse({"message": "Password has been set"})
