"""User invitation endpoint: admin only."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from notely.api.deps import get_provisioning_service, require_inviter
from notely.api.models.schemas import UserInvite, UserOut
from notely.core.types import Identity
from notely.services.provisioning import ProvisioningService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut)
async def invite_user(
    body: UserInvite,
    identity: Identity = Depends(require_inviter),
    service: ProvisioningService = Depends(get_provisioning_service),
) -> UserOut:
    user, tenant = await service.invite_user(
        identity,
        email=body.email,
        password=body.password,
        role=body.role,
        tenant_slug=body.tenant_slug,
    )
    return UserOut(id=user.id, email=user.email, role=user.role, tenant=tenant.slug)
