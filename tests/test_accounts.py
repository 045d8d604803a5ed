"""Tests for session login and user management."""

from datetime import timedelta
from urllib.parse import parse_qs, urlparse

import pytest
from django.core import mail
from django.test import Client
from django.urls import reverse
from django.utils import timezone

from apps.accounts.models import User
from apps.core.models import SiteSettings


def _json(client: Client, method: str, name: str, payload: dict):
    return getattr(client, method)(reverse(name), payload, content_type="application/json")


@pytest.mark.django_db
class TestAuth:
    """Login, session and logout."""

    def test_login_sets_session(self, client: Client, admin_user: User) -> None:
        response = _json(client, "post", "accounts:login", {"email": "admin@banglong.test", "password": "testpass123"})
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "admin@banglong.test"

        session = client.get(reverse("accounts:session"))
        assert session.status_code == 200
        assert session.json()["user"]["role"] == "admin"

    def test_login_is_case_insensitive_on_email(self, client: Client, admin_user: User) -> None:
        response = _json(client, "post", "accounts:login", {"email": "Admin@Banglong.test", "password": "testpass123"})
        assert response.status_code == 200

    def test_superuser_with_mixed_case_email_can_login(self, client: Client, db) -> None:
        boss = User.objects.create_superuser(email="Boss@Banglong.TEST", password="testpass123")
        assert boss.email == boss.username == "boss@banglong.test"

        response = _json(client, "post", "accounts:login", {"email": "Boss@Banglong.TEST", "password": "testpass123"})
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"

    def test_bad_credentials(self, client: Client, admin_user: User) -> None:
        response = _json(client, "post", "accounts:login", {"email": "admin@banglong.test", "password": "wrong"})
        assert response.status_code == 401

    def test_missing_fields(self, client: Client, db) -> None:
        response = _json(client, "post", "accounts:login", {"email": ""})
        assert response.status_code == 400
        assert set(response.json()["details"]) == {"email", "password"}

    def test_logout(self, admin_client: Client) -> None:
        assert admin_client.post(reverse("accounts:logout")).status_code == 200
        assert admin_client.get(reverse("accounts:session")).status_code == 401

    def test_session_anonymous(self, client: Client, db) -> None:
        assert client.get(reverse("accounts:session")).status_code == 401

    def test_user_payload_hides_secrets(self, admin_client: Client) -> None:
        user = admin_client.get(reverse("accounts:session")).json()["user"]
        assert "password" not in user
        assert "resetToken" not in user


@pytest.mark.django_db
class TestUsersApi:
    """Admin-role user management at /api/users/."""

    def test_list_newest_first(self, admin_client: Client, editor_user: User) -> None:
        response = admin_client.get(reverse("accounts:users"))
        assert response.status_code == 200
        emails = [u["email"] for u in response.json()["data"]]
        assert emails == ["editor@banglong.test", "admin@banglong.test"]

    def test_editor_is_rejected(self, editor_client: Client) -> None:
        assert editor_client.get(reverse("accounts:users")).status_code == 401
        response = _json(editor_client, "post", "accounts:users", {"name": "Sneaky", "email": "s@banglong.test"})
        assert response.status_code == 401
        assert not User.objects.filter(email="s@banglong.test").exists()

    def test_anonymous_is_rejected(self, client: Client, db) -> None:
        assert client.get(reverse("accounts:users")).status_code == 401

    def test_create_sends_invitation(self, admin_client: Client) -> None:
        response = _json(
            admin_client, "post", "accounts:users", {"name": "Wang Hao", "email": "hao@banglong.test", "role": "editor"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "editor"
        assert response.json()["data"]["hasChangedPassword"] is False

        user = User.objects.get(email="hao@banglong.test")
        assert user.reset_token
        assert user.reset_token_expiry > timezone.now() + timedelta(hours=23)

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ["hao@banglong.test"]
        assert message.subject == "Invitation to the Banglong admin panel"
        link = next(word for word in message.body.split() if word.startswith("https://testserver/reset-password"))
        query = parse_qs(urlparse(link).query)
        assert query == {"email": ["hao@banglong.test"], "token": [user.reset_token]}

    def test_create_uses_invitation_template(self, admin_client: Client) -> None:
        SiteSettings.objects.create(
            type="email", key="invitationTemplate", value="Hi {{name}}, set up {{email}} at {{link}}"
        )
        _json(admin_client, "post", "accounts:users", {"name": "Wang Hao", "email": "hao@banglong.test"})
        assert mail.outbox[0].body.startswith("Hi Wang Hao, set up hao@banglong.test at https://testserver/")

    def test_create_duplicate_email(self, admin_client: Client, editor_user: User) -> None:
        response = _json(admin_client, "post", "accounts:users", {"name": "Again", "email": "EDITOR@banglong.test"})
        assert response.status_code == 400
        assert mail.outbox == []

    def test_create_validation(self, admin_client: Client) -> None:
        response = _json(admin_client, "post", "accounts:users", {"name": "A", "email": "nope", "role": "owner"})
        assert response.status_code == 400
        assert set(response.json()["details"]) == {"name", "email", "role"}

    def test_update(self, admin_client: Client, editor_user: User) -> None:
        response = _json(
            admin_client,
            "put",
            "accounts:users",
            {"id": editor_user.pk, "name": "Lead Editor", "email": "lead@banglong.test", "role": "admin",
             "password": "newsecret"},
        )
        assert response.status_code == 200
        editor_user.refresh_from_db()
        assert editor_user.name == "Lead Editor"
        assert editor_user.email == "lead@banglong.test"
        assert editor_user.role == "admin"
        assert editor_user.check_password("newsecret")

    def test_update_email_taken(self, admin_client: Client, editor_user: User) -> None:
        response = _json(
            admin_client,
            "put",
            "accounts:users",
            {"id": editor_user.pk, "name": "Editor", "email": "admin@banglong.test", "role": "editor"},
        )
        assert response.status_code == 400

    def test_update_unknown(self, admin_client: Client) -> None:
        response = _json(
            admin_client, "put", "accounts:users", {"id": 999, "name": "Ghost", "email": "ghost@banglong.test"}
        )
        assert response.status_code == 404

    def test_delete(self, admin_client: Client, editor_user: User) -> None:
        response = admin_client.delete(f"{reverse('accounts:users')}?id={editor_user.pk}")
        assert response.status_code == 200
        assert not User.objects.filter(pk=editor_user.pk).exists()

    def test_cannot_delete_self(self, admin_client: Client, admin_user: User) -> None:
        response = admin_client.delete(f"{reverse('accounts:users')}?id={admin_user.pk}")
        assert response.status_code == 400
        assert User.objects.filter(pk=admin_user.pk).exists()

    def test_delete_missing_or_unknown(self, admin_client: Client) -> None:
        assert admin_client.delete(reverse("accounts:users")).status_code == 400
        assert admin_client.delete(f"{reverse('accounts:users')}?id=999").status_code == 404


@pytest.mark.django_db
class TestPasswords:
    """Change and reset password flows."""

    def test_change_password(self, editor_client: Client, editor_user: User) -> None:
        response = _json(
            editor_client, "post", "accounts:change_password", {"oldPassword": "testpass123", "newPassword": "brandnew"}
        )
        assert response.status_code == 200
        editor_user.refresh_from_db()
        assert editor_user.check_password("brandnew")
        assert editor_user.has_changed_password is True
        # Session survives the password change
        assert editor_client.get(reverse("accounts:session")).status_code == 200

    def test_change_password_wrong_old(self, editor_client: Client, editor_user: User) -> None:
        response = _json(
            editor_client, "post", "accounts:change_password", {"oldPassword": "guess", "newPassword": "brandnew"}
        )
        assert response.status_code == 400
        editor_user.refresh_from_db()
        assert editor_user.check_password("testpass123")

    def test_change_password_requires_session(self, client: Client, db) -> None:
        response = _json(client, "post", "accounts:change_password", {"oldPassword": "a", "newPassword": "bbbbbb"})
        assert response.status_code == 401

    def test_reset_password_with_token(self, client: Client, editor_user: User) -> None:
        token = editor_user.issue_reset_token()
        editor_user.save()

        response = _json(
            client,
            "post",
            "accounts:reset_password",
            {"email": "editor@banglong.test", "token": token, "password": "chosenpw"},
        )
        assert response.status_code == 200
        editor_user.refresh_from_db()
        assert editor_user.check_password("chosenpw")
        assert editor_user.has_changed_password is True
        assert editor_user.reset_token == ""
        assert editor_user.reset_token_expiry is None

        # The token is single use
        response = _json(
            client,
            "post",
            "accounts:reset_password",
            {"email": "editor@banglong.test", "token": token, "password": "another1"},
        )
        assert response.status_code == 400

    def test_reset_password_expired_token(self, client: Client, editor_user: User) -> None:
        token = editor_user.issue_reset_token()
        editor_user.reset_token_expiry = timezone.now() - timedelta(minutes=1)
        editor_user.save()

        response = _json(
            client,
            "post",
            "accounts:reset_password",
            {"email": "editor@banglong.test", "token": token, "password": "chosenpw"},
        )
        assert response.status_code == 400
        editor_user.refresh_from_db()
        assert editor_user.check_password("testpass123")

    def test_reset_password_wrong_token(self, client: Client, editor_user: User) -> None:
        editor_user.issue_reset_token()
        editor_user.save()
        response = _json(
            client,
            "post",
            "accounts:reset_password",
            {"email": "editor@banglong.test", "token": "f" * 64, "password": "chosenpw"},
        )
        assert response.status_code == 400
