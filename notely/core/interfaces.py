"""Abstract base classes: all store backends must implement these interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from notely.core.types import Note, Role, Tenant, TenantPlan, User


class NoteStore(ABC):
    """Persistence for tenants, users and notes.

    Each call is its own unit of work. Implementations raise
    ``DuplicateError`` when a unique field (tenant slug, user email) is
    already taken and return ``None`` for lookups that find nothing.
    """

    # ── Tenants ──────────────────────────────────────────────────

    @abstractmethod
    async def create_tenant(self, name: str, slug: str, plan: TenantPlan = TenantPlan.FREE) -> Tenant:
        ...

    @abstractmethod
    async def get_tenant(self, tenant_id: str) -> Tenant | None:
        ...

    @abstractmethod
    async def get_tenant_by_slug(self, slug: str) -> Tenant | None:
        ...

    @abstractmethod
    async def set_tenant_plan(self, slug: str, plan: TenantPlan) -> Tenant | None:
        """Set the plan of the tenant with ``slug``; ``None`` if no such tenant."""
        ...

    # ── Users ────────────────────────────────────────────────────

    @abstractmethod
    async def create_user(self, email: str, password_hash: str, role: Role, tenant_id: str) -> User:
        ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        ...

    # ── Notes ────────────────────────────────────────────────────

    @abstractmethod
    async def count_notes(self, tenant_id: str) -> int:
        ...

    @abstractmethod
    async def create_note(self, title: str, content: str, tenant_id: str, created_by: str) -> Note:
        ...

    @abstractmethod
    async def list_notes(self, tenant_id: str) -> list[Note]:
        """All notes of a tenant in insertion order."""
        ...

    @abstractmethod
    async def get_note(self, note_id: str) -> Note | None:
        ...

    @abstractmethod
    async def update_note(self, note_id: str, title: str, content: str) -> Note | None:
        """Overwrite title and content; tenant and author are left untouched."""
        ...

    @abstractmethod
    async def delete_note(self, note_id: str) -> bool:
        ...

    async def close(self) -> None:
        """Release backend resources. Default is a no-op."""
        return None
