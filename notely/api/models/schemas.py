"""Pydantic V2 request/response schemas for the Notely API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from notely.core.types import Note, Role, Tenant, TenantPlan


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Health ───────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str


class MessageResponse(BaseModel):
    message: str


# ── Tenants ──────────────────────────────────────────────────────

class TenantCreate(CamelModel):
    """Both fields are checked by the service so the error names them."""

    name: str | None = None
    slug: str | None = None


class TenantCreated(CamelModel):
    tenant_id: str
    name: str
    slug: str


class TenantOut(CamelModel):
    id: str
    name: str
    slug: str
    plan: TenantPlan
    created_at: datetime

    @classmethod
    def from_tenant(cls, tenant: Tenant) -> "TenantOut":
        return cls(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            plan=tenant.plan,
            created_at=tenant.created_at,
        )


class UpgradeResponse(BaseModel):
    message: str
    tenant: TenantOut


# ── Users & Auth ─────────────────────────────────────────────────

class UserInvite(CamelModel):
    email: str
    password: str
    role: Role = Role.MEMBER
    tenant_slug: str


class UserOut(CamelModel):
    id: str
    email: str
    role: Role
    tenant: str  # tenant slug


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str


# ── Notes ────────────────────────────────────────────────────────

class NoteIn(CamelModel):
    """Request body for creating or replacing a note."""

    title: str
    content: str


class NoteOut(CamelModel):
    id: str
    title: str
    content: str
    tenant_id: str
    created_by: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_note(cls, note: Note) -> "NoteOut":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            tenant_id=note.tenant_id,
            created_by=note.created_by,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )
