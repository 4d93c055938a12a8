"""Custom exception hierarchy for Notely.

Every error a client may see derives from ``NotelyBaseError`` and carries the
HTTP status it maps to. The API layer renders them as ``{"message": ...}``.
"""

from __future__ import annotations

from typing import Any


class NotelyBaseError(Exception):
    """Base exception for all Notely errors."""

    status_code: int = 500

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


# ── Request Layer ────────────────────────────────────────────────

class ValidationError(NotelyBaseError):
    """Required fields missing or malformed."""

    status_code = 400


# ── Identity Layer ───────────────────────────────────────────────

class Unauthenticated(NotelyBaseError):
    """Bearer token missing, malformed, badly signed or expired."""

    status_code = 401


class InvalidCredentials(NotelyBaseError):
    """Login failed. Same message for unknown email and wrong password."""

    status_code = 401


class InvalidTokenError(NotelyBaseError):
    """Token codec could not verify a token."""

    status_code = 401


# ── Policy Layer ─────────────────────────────────────────────────

class Forbidden(NotelyBaseError):
    """Authenticated, but the role does not allow the action."""

    status_code = 403


class QuotaExceeded(NotelyBaseError):
    """Tenant plan does not allow another note."""

    status_code = 403


class NotFound(NotelyBaseError):
    """Entity absent, or owned by another tenant."""

    status_code = 404


# ── Store Layer ──────────────────────────────────────────────────

class DuplicateError(NotelyBaseError):
    """Unique constraint (tenant slug, user email) violated."""

    status_code = 409
