"""System-wide constants. All magic numbers and strings live here."""

from __future__ import annotations

# ── Token ────────────────────────────────────────────────────────
JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_EXPIRY_HOURS = 1

# ── Quota ────────────────────────────────────────────────────────
FREE_PLAN_MAX_NOTES = 3

# ── Tenant Slugs ─────────────────────────────────────────────────
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

# ── Client Messages ──────────────────────────────────────────────
MSG_NO_TOKEN = "No token"
MSG_INVALID_TOKEN = "Invalid token"
MSG_INVALID_CREDENTIALS = "Invalid credentials"
MSG_INVALID_BODY = "Invalid request body"
MSG_NAME_SLUG_REQUIRED = "Name and slug required"
MSG_EMAIL_PASSWORD_REQUIRED = "Email and password required"
MSG_INVALID_SLUG = "Slug must be lowercase letters, digits and single hyphens"
MSG_ADMIN_INVITE_ONLY = "Only Admin can invite users"
MSG_ADMIN_UPGRADE_ONLY = "Only Admin can upgrade plan"
MSG_QUOTA_EXCEEDED = "Free plan allows max 3 notes. Upgrade to Pro."
MSG_TENANT_NOT_FOUND = "Tenant not found"
MSG_NOTE_NOT_FOUND = "Note not found"
MSG_NOTE_DELETED = "Note deleted"
MSG_TENANT_UPGRADED = "Tenant upgraded to PRO"
MSG_SLUG_TAKEN = "Tenant slug already exists"
MSG_EMAIL_TAKEN = "Email already registered"
