"""Tenant endpoints: open registration and admin plan upgrades."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from notely.api.deps import get_provisioning_service, require_identity
from notely.api.models.schemas import (
    TenantCreate,
    TenantCreated,
    TenantOut,
    UpgradeResponse,
)
from notely.core.types import Identity
from notely.services.provisioning import ProvisioningService

router = APIRouter(tags=["tenants"])


@router.post("/tenant", response_model=TenantCreated)
async def register_tenant(
    body: TenantCreate,
    service: ProvisioningService = Depends(get_provisioning_service),
) -> TenantCreated:
    """Register a new tenant on the FREE plan."""
    tenant = await service.register_tenant(body.name, body.slug)
    return TenantCreated(tenant_id=tenant.id, name=tenant.name, slug=tenant.slug)


@router.post("/tenants/{slug}/upgrade", response_model=UpgradeResponse)
async def upgrade_tenant(
    slug: str,
    identity: Identity = Depends(require_identity),
    service: ProvisioningService = Depends(get_provisioning_service),
) -> UpgradeResponse:
    """Upgrade a tenant to PRO (admin only, idempotent)."""
    result = await service.upgrade_tenant(identity, slug)
    return UpgradeResponse(message=result.message, tenant=TenantOut.from_tenant(result.tenant))
