"""Note lifecycle: tenant-scoped CRUD behind the policy checks."""

from __future__ import annotations

from notely import policy
from notely.core.constants import MSG_NOTE_DELETED, MSG_NOTE_NOT_FOUND, MSG_TENANT_NOT_FOUND
from notely.core.exceptions import NotFound
from notely.core.interfaces import NoteStore
from notely.core.logging import get_logger
from notely.core.types import Identity, Note

log = get_logger(__name__)


class NoteService:
    """Create, read, update and delete notes for the caller's tenant.

    The quota check is a plain count followed by an insert, not one atomic
    step; two concurrent creates for a FREE tenant can both pass the count
    and briefly push it past its limit.
    """

    def __init__(self, store: NoteStore) -> None:
        self._store = store

    async def create(self, identity: Identity, title: str, content: str) -> Note:
        tenant = await self._store.get_tenant(identity.tenant_id)
        if tenant is None:
            raise NotFound(MSG_TENANT_NOT_FOUND, {"tenant_id": identity.tenant_id})

        count = await self._store.count_notes(tenant.id)
        decision = policy.can_create_note(identity, tenant, count)
        if not decision.allowed:
            log.info("note_quota_exceeded", tenant_id=tenant.id, count=count)
        decision.enforce()

        note = await self._store.create_note(
            title=title,
            content=content,
            tenant_id=identity.tenant_id,
            created_by=identity.user_id,
        )
        log.info("note_created", note_id=note.id, tenant_id=note.tenant_id)
        return note

    async def list(self, identity: Identity) -> list[Note]:
        return await self._store.list_notes(identity.tenant_id)

    async def get(self, identity: Identity, note_id: str) -> Note:
        note = await self._store.get_note(note_id)
        policy.can_access_note(identity, note).enforce()
        return note  # type: ignore[return-value]

    async def update(self, identity: Identity, note_id: str, title: str, content: str) -> Note:
        await self.get(identity, note_id)

        updated = await self._store.update_note(note_id, title=title, content=content)
        if updated is None:
            # Deleted between the ownership check and the write
            raise NotFound(MSG_NOTE_NOT_FOUND)
        log.info("note_updated", note_id=note_id, tenant_id=identity.tenant_id)
        return updated

    async def delete(self, identity: Identity, note_id: str) -> str:
        await self.get(identity, note_id)

        await self._store.delete_note(note_id)
        log.info("note_deleted", note_id=note_id, tenant_id=identity.tenant_id)
        return MSG_NOTE_DELETED
