"""Note endpoints: tenant-scoped CRUD."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from notely.api.deps import get_note_service, require_identity
from notely.api.models.schemas import MessageResponse, NoteIn, NoteOut
from notely.core.types import Identity
from notely.services.notes import NoteService

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("", response_model=NoteOut)
async def create_note(
    body: NoteIn,
    identity: Identity = Depends(require_identity),
    service: NoteService = Depends(get_note_service),
) -> NoteOut:
    """Create a note in the caller's tenant, subject to the plan quota."""
    note = await service.create(identity, body.title, body.content)
    return NoteOut.from_note(note)


@router.get("", response_model=list[NoteOut])
async def list_notes(
    identity: Identity = Depends(require_identity),
    service: NoteService = Depends(get_note_service),
) -> list[NoteOut]:
    """List all notes of the caller's tenant."""
    return [NoteOut.from_note(n) for n in await service.list(identity)]


@router.get("/{note_id}", response_model=NoteOut)
async def get_note(
    note_id: str,
    identity: Identity = Depends(require_identity),
    service: NoteService = Depends(get_note_service),
) -> NoteOut:
    return NoteOut.from_note(await service.get(identity, note_id))


@router.put("/{note_id}", response_model=NoteOut)
async def update_note(
    note_id: str,
    body: NoteIn,
    identity: Identity = Depends(require_identity),
    service: NoteService = Depends(get_note_service),
) -> NoteOut:
    """Replace title and content of a note."""
    note = await service.update(identity, note_id, body.title, body.content)
    return NoteOut.from_note(note)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    identity: Identity = Depends(require_identity),
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    message = await service.delete(identity, note_id)
    return MessageResponse(message=message)
