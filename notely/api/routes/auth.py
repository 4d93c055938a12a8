"""Authentication routes: password login issuing a bearer token.

There is no logout route: tokens are stateless, so logging out means the
client discards its token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from notely.api.deps import get_provisioning_service
from notely.api.models.schemas import LoginRequest, TokenResponse
from notely.services.provisioning import ProvisioningService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    service: ProvisioningService = Depends(get_provisioning_service),
) -> TokenResponse:
    token = await service.login(body.email, body.password)
    return TokenResponse(token=token)
