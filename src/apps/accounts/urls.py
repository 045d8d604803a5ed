"""Accounts API URL configuration."""

from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    path("auth/login/", views.LoginView.as_view(), name="login"),
    path("auth/logout/", views.LogoutView.as_view(), name="logout"),
    path("auth/session/", views.SessionView.as_view(), name="session"),
    path("users/", views.UsersView.as_view(), name="users"),
    path("users/change-password/", views.ChangePasswordView.as_view(), name="change_password"),
    path("users/reset-password/", views.ResetPasswordView.as_view(), name="reset_password"),
]
