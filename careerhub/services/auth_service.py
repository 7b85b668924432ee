"""Auth flows over the hosted auth collaborator.

Every function returns ``ApiResponse``; collaborator failures become the
``error`` string and nothing is raised.
"""

import logging
from typing import Any

from careerhub.backend.base import AuthBackend
from careerhub.core.errors import CareerHubError
from careerhub.core.schemas import ApiResponse, AuthUser

logger = logging.getLogger(__name__)


def to_auth_user(row: dict[str, Any]) -> AuthUser:
    return AuthUser(
        id=row["id"],
        email=row.get("email") or "",
        email_confirmed_at=row.get("email_confirmed_at"),
        user_metadata=row.get("user_metadata"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def signup(auth: AuthBackend, email: str, password: str) -> ApiResponse[AuthUser]:
    try:
        row = auth.sign_up(email, password)
    except CareerHubError as e:
        logger.error("Signup failed: %s", e)
        return ApiResponse(error=str(e) or "Signup failed")
    if row is None:
        return ApiResponse(error="User creation failed")
    return ApiResponse[AuthUser](data=to_auth_user(row))


def login(auth: AuthBackend, email: str, password: str) -> ApiResponse[AuthUser]:
    try:
        row = auth.sign_in_with_password(email, password)
    except CareerHubError as e:
        logger.error("Login failed: %s", e)
        return ApiResponse(error=str(e) or "Login failed")
    if row is None:
        return ApiResponse(error="Login failed")
    return ApiResponse[AuthUser](data=to_auth_user(row))


def logout(auth: AuthBackend) -> ApiResponse[None]:
    try:
        auth.sign_out()
    except CareerHubError as e:
        logger.error("Logout failed: %s", e)
        return ApiResponse(error=str(e) or "Logout failed")
    return ApiResponse[None]()


def get_current_user(auth: AuthBackend) -> ApiResponse[AuthUser]:
    try:
        row = auth.get_user()
    except CareerHubError as e:
        return ApiResponse(error=str(e) or "Failed to get user")
    if row is None:
        return ApiResponse(error="No user logged in")
    return ApiResponse[AuthUser](data=to_auth_user(row))


def request_password_reset(auth: AuthBackend, email: str, redirect_to: str) -> ApiResponse[None]:
    """Email a reset link that lands on ``redirect_to``."""
    try:
        auth.reset_password_for_email(email, redirect_to)
    except CareerHubError as e:
        logger.error("Password reset request failed: %s", e)
        return ApiResponse(error=str(e) or "Failed to send reset email")
    return ApiResponse[None]()


def update_password(auth: AuthBackend, password: str) -> ApiResponse[AuthUser]:
    try:
        row = auth.update_user(password)
    except CareerHubError as e:
        logger.error("Password update failed: %s", e)
        return ApiResponse(error=str(e) or "Failed to update password")
    return ApiResponse[AuthUser](data=to_auth_user(row) if row else None)


def resend_confirmation(auth: AuthBackend, email: str) -> ApiResponse[None]:
    try:
        auth.resend("signup", email)
    except CareerHubError as e:
        logger.error("Resending confirmation failed: %s", e)
        return ApiResponse(error=str(e) or "Failed to resend confirmation email")
    return ApiResponse[None]()
