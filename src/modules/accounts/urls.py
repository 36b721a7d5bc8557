"""Account URL configuration."""

from __future__ import annotations

from django.urls import re_path

from modules.accounts.views import LoginView

urlpatterns = [
    re_path(r"^auth/login/?$", LoginView.as_view(), name="auth_login"),
]
