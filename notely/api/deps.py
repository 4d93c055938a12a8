"""FastAPI dependency injection: shared instances for routes.

Everything here reads from ``app.state``, which ``create_app`` fills from the
settings it was given.
"""

from __future__ import annotations

from fastapi import Depends, Request

from config.settings import Settings
from notely import policy
from notely.api.middleware import get_current_identity, get_jwt
from notely.auth.tokens import JWTManager
from notely.core.interfaces import NoteStore
from notely.core.types import Identity
from notely.services.notes import NoteService
from notely.services.provisioning import ProvisioningService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> NoteStore:
    return request.app.state.store


# ── Services ─────────────────────────────────────────────────────


def get_note_service(store: NoteStore = Depends(get_store)) -> NoteService:
    return NoteService(store)


def get_provisioning_service(
    store: NoteStore = Depends(get_store),
    jwt: JWTManager = Depends(get_jwt),
    settings: Settings = Depends(get_app_settings),
) -> ProvisioningService:
    return ProvisioningService(store, jwt, bcrypt_rounds=settings.bcrypt_rounds)


# ── Auth dependency ──────────────────────────────────────────────


async def require_identity(
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    """Verified identity of the caller; 401 before the handler runs otherwise."""
    return identity


async def require_inviter(
    identity: Identity = Depends(require_identity),
) -> Identity:
    """Caller allowed to invite users; 403 before the request body is validated."""
    policy.can_invite_user(identity).enforce()
    return identity
