"""In-memory store for development and tests.

Not durable; everything is lost when the process exits. Dicts keep insertion
order, which is the order ``list_notes`` returns.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

from uuid_extensions import uuid7

from notely.core.constants import MSG_EMAIL_TAKEN, MSG_SLUG_TAKEN
from notely.core.exceptions import DuplicateError
from notely.core.interfaces import NoteStore
from notely.core.types import Note, Role, Tenant, TenantPlan, User


class InMemoryNoteStore(NoteStore):
    """Dict-backed NoteStore. Returns copies so callers cannot mutate stored rows."""

    def __init__(self) -> None:
        self._tenants: dict[str, Tenant] = {}
        self._slug_index: dict[str, str] = {}  # slug -> tenant_id
        self._users: dict[str, User] = {}
        self._email_index: dict[str, str] = {}  # email -> user_id
        self._notes: dict[str, Note] = {}

    # ── Tenants ──────────────────────────────────────────────────

    async def create_tenant(self, name: str, slug: str, plan: TenantPlan = TenantPlan.FREE) -> Tenant:
        if slug in self._slug_index:
            raise DuplicateError(MSG_SLUG_TAKEN, {"slug": slug})
        tenant = Tenant(id=str(uuid7()), name=name, slug=slug, plan=plan)
        self._tenants[tenant.id] = tenant
        self._slug_index[slug] = tenant.id
        return dataclasses.replace(tenant)

    async def get_tenant(self, tenant_id: str) -> Tenant | None:
        tenant = self._tenants.get(tenant_id)
        return dataclasses.replace(tenant) if tenant else None

    async def get_tenant_by_slug(self, slug: str) -> Tenant | None:
        tenant_id = self._slug_index.get(slug)
        if tenant_id is None:
            return None
        return await self.get_tenant(tenant_id)

    async def set_tenant_plan(self, slug: str, plan: TenantPlan) -> Tenant | None:
        tenant_id = self._slug_index.get(slug)
        if tenant_id is None:
            return None
        tenant = self._tenants[tenant_id]
        tenant.plan = plan
        return dataclasses.replace(tenant)

    # ── Users ────────────────────────────────────────────────────

    async def create_user(self, email: str, password_hash: str, role: Role, tenant_id: str) -> User:
        if email in self._email_index:
            raise DuplicateError(MSG_EMAIL_TAKEN, {"email": email})
        user = User(
            id=str(uuid7()),
            email=email,
            password_hash=password_hash,
            role=role,
            tenant_id=tenant_id,
        )
        self._users[user.id] = user
        self._email_index[email] = user.id
        return dataclasses.replace(user)

    async def get_user_by_email(self, email: str) -> User | None:
        user_id = self._email_index.get(email)
        if user_id is None:
            return None
        return dataclasses.replace(self._users[user_id])

    # ── Notes ────────────────────────────────────────────────────

    async def count_notes(self, tenant_id: str) -> int:
        return sum(1 for n in self._notes.values() if n.tenant_id == tenant_id)

    async def create_note(self, title: str, content: str, tenant_id: str, created_by: str) -> Note:
        note = Note(
            id=str(uuid7()),
            title=title,
            content=content,
            tenant_id=tenant_id,
            created_by=created_by,
        )
        self._notes[note.id] = note
        return dataclasses.replace(note)

    async def list_notes(self, tenant_id: str) -> list[Note]:
        return [dataclasses.replace(n) for n in self._notes.values() if n.tenant_id == tenant_id]

    async def get_note(self, note_id: str) -> Note | None:
        note = self._notes.get(note_id)
        return dataclasses.replace(note) if note else None

    async def update_note(self, note_id: str, title: str, content: str) -> Note | None:
        note = self._notes.get(note_id)
        if note is None:
            return None
        note.title = title
        note.content = content
        note.updated_at = datetime.now(timezone.utc)
        return dataclasses.replace(note)

    async def delete_note(self, note_id: str) -> bool:
        return self._notes.pop(note_id, None) is not None
