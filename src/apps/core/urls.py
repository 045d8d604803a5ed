"""Core API URL configuration."""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    path("captcha/", views.CaptchaView.as_view(), name="captcha"),
    # Contacts
    path("contacts/", views.ContactSubmitView.as_view(), name="contact_submit"),
    path("contacts/admin/", views.ContactAdminView.as_view(), name="contact_admin"),
    path("send-email/", views.SendEmailView.as_view(), name="send_email"),
    # Admin panel
    path("settings/", views.SettingsView.as_view(), name="settings"),
    path("upload/", views.UploadView.as_view(), name="upload"),
]
