"""Persistence backends for tenants, users and notes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from notely.core.interfaces import NoteStore
from notely.core.logging import get_logger
from notely.store.memory import InMemoryNoteStore
from notely.store.schema import get_engine
from notely.store.sql import SqlNoteStore

if TYPE_CHECKING:
    from config.settings import Settings

log = get_logger(__name__)


async def open_store(settings: Settings) -> NoteStore:
    """Build the store selected by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        log.warning("store_in_memory", reason="data is not persisted")
        return InMemoryNoteStore()

    engine = await get_engine(settings.database_url.get_secret_value())
    return SqlNoteStore(engine)


__all__ = [
    "InMemoryNoteStore",
    "NoteStore",
    "SqlNoteStore",
    "open_store",
]
