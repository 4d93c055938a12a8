"""Tenant and role policy: pure authorization decisions.

Each rule takes the verified ``Identity`` plus whatever it needs to know
about the target and returns a ``Decision``. Rules never touch the store;
callers load the tenant / note / count first and enforce the result with
``Decision.enforce()``.

Role only matters for tenant administration (inviting users, upgrading the
plan). Notes are guarded by tenant membership alone, so any MEMBER may read,
edit or delete any note of their tenant.
"""

from __future__ import annotations

from dataclasses import dataclass

from notely.core.constants import (
    FREE_PLAN_MAX_NOTES,
    MSG_ADMIN_INVITE_ONLY,
    MSG_ADMIN_UPGRADE_ONLY,
    MSG_NOTE_NOT_FOUND,
    MSG_QUOTA_EXCEEDED,
)
from notely.core.exceptions import Forbidden, NotelyBaseError, NotFound, QuotaExceeded
from notely.core.logging import get_logger
from notely.core.types import Identity, Note, Tenant, TenantPlan

log = get_logger(__name__)

# None means unlimited
PLAN_NOTE_LIMITS: dict[TenantPlan, int | None] = {
    TenantPlan.FREE: FREE_PLAN_MAX_NOTES,
    TenantPlan.PRO: None,
}


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy rule: allowed, or denied with the error to raise."""

    denial: NotelyBaseError | None = None

    @property
    def allowed(self) -> bool:
        return self.denial is None

    def enforce(self) -> None:
        if self.denial is not None:
            raise self.denial


ALLOW = Decision()


def deny(error: NotelyBaseError) -> Decision:
    return Decision(denial=error)


def can_invite_user(identity: Identity) -> Decision:
    if not identity.is_admin:
        return deny(Forbidden(MSG_ADMIN_INVITE_ONLY, {"user_id": identity.user_id}))
    return ALLOW


def can_upgrade_plan(identity: Identity, target_slug: str) -> Decision:
    """Admins may upgrade a tenant.

    The target slug is not compared with the admin's own tenant; an admin
    token can upgrade any slug it names. Such upgrades are logged.
    """
    if not identity.is_admin:
        return deny(Forbidden(MSG_ADMIN_UPGRADE_ONLY, {"user_id": identity.user_id}))
    if identity.tenant_slug != target_slug:
        log.warning(
            "cross_tenant_upgrade",
            user_id=identity.user_id,
            own_slug=identity.tenant_slug,
            target_slug=target_slug,
        )
    return ALLOW


def note_limit(plan: TenantPlan) -> int | None:
    return PLAN_NOTE_LIMITS[plan]


def can_create_note(identity: Identity, tenant: Tenant, note_count: int) -> Decision:
    """Check the tenant's plan quota against its current note count."""
    limit = note_limit(tenant.plan)
    if limit is not None and note_count >= limit:
        return deny(
            QuotaExceeded(
                MSG_QUOTA_EXCEEDED,
                {"tenant_id": tenant.id, "plan": tenant.plan.value, "count": note_count},
            )
        )
    return ALLOW


def can_access_note(identity: Identity, note: Note | None) -> Decision:
    """Notes of other tenants are reported as missing, not forbidden."""
    if note is None or note.tenant_id != identity.tenant_id:
        return deny(NotFound(MSG_NOTE_NOT_FOUND))
    return ALLOW
