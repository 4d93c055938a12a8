"""System-wide shared types: the single source of truth for all data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ── Enums ────────────────────────────────────────────────────────

class TenantPlan(str, Enum):
    FREE = "FREE"
    PRO = "PRO"


class Role(str, Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


# ── Entities ─────────────────────────────────────────────────────

@dataclass
class Tenant:
    """An isolated organization owning its own users and notes."""

    id: str
    name: str
    slug: str
    plan: TenantPlan = TenantPlan.FREE
    created_at: datetime = field(default_factory=_utc_now)


@dataclass
class User:
    """A tenant member. ``tenant_id`` never changes after creation."""

    id: str
    email: str
    password_hash: str
    role: Role
    tenant_id: str
    created_at: datetime = field(default_factory=_utc_now)


@dataclass
class Note:
    id: str
    title: str
    content: str
    tenant_id: str
    created_by: str
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)


# ── Identity ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Identity:
    """Verified claims of a bearer token.

    Authorization decisions are made from these fields only, never from
    identifiers supplied in a request body or path.
    """

    user_id: str
    tenant_id: str
    role: Role
    tenant_slug: str
    expires_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
