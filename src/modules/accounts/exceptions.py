"""Account domain exceptions.

Raised by ``AuthService``; the exception handler renders them.
"""

from __future__ import annotations

from modules.core.exceptions import AuthenticationError, ValidationError


class MissingCredentials(ValidationError):
    status_code = 400
    default_message = "username and password are required"


class InvalidCredentials(AuthenticationError):
    default_message = "Invalid credentials"
