"""Tenant and user provisioning: registration, invitations, login, plan upgrades."""

from __future__ import annotations

import re
from dataclasses import dataclass

from notely import policy
from notely.auth.passwords import hash_password_async, verify_password_async
from notely.auth.tokens import JWTManager
from notely.core.constants import (
    MSG_EMAIL_PASSWORD_REQUIRED,
    MSG_INVALID_CREDENTIALS,
    MSG_INVALID_SLUG,
    MSG_NAME_SLUG_REQUIRED,
    MSG_TENANT_NOT_FOUND,
    MSG_TENANT_UPGRADED,
    SLUG_PATTERN,
)
from notely.core.exceptions import InvalidCredentials, NotFound, ValidationError
from notely.core.interfaces import NoteStore
from notely.core.logging import get_logger
from notely.core.types import Identity, Role, Tenant, TenantPlan, User

log = get_logger(__name__)

_SLUG_RE = re.compile(SLUG_PATTERN)

# bcrypt only looks at the first 72 bytes of a password
_MAX_PASSWORD_BYTES = 72

# Unknown emails are checked against this hash so every failed login runs bcrypt
_DUMMY_PASSWORD = "notely-unknown-user"
_dummy_hashes: dict[int, str] = {}


@dataclass
class UpgradeResult:
    message: str
    tenant: Tenant


class ProvisioningService:
    """Everything that creates tenants or users, or hands out tokens."""

    def __init__(self, store: NoteStore, jwt: JWTManager, bcrypt_rounds: int = 10) -> None:
        self._store = store
        self._jwt = jwt
        self._bcrypt_rounds = bcrypt_rounds

    async def register_tenant(self, name: str | None, slug: str | None) -> Tenant:
        """Create a FREE tenant. Open to anyone; no users are created."""
        if not name or not slug:
            raise ValidationError(MSG_NAME_SLUG_REQUIRED)
        if not _SLUG_RE.match(slug):
            raise ValidationError(MSG_INVALID_SLUG, {"slug": slug})

        tenant = await self._store.create_tenant(name=name, slug=slug, plan=TenantPlan.FREE)
        log.info("tenant_created", tenant_id=tenant.id, slug=slug, plan=tenant.plan.value)
        return tenant

    async def invite_user(
        self,
        identity: Identity,
        email: str,
        password: str,
        role: Role,
        tenant_slug: str,
    ) -> tuple[User, Tenant]:
        """Create a user under ``tenant_slug`` on behalf of an admin.

        The target tenant is whatever slug the admin names, which need not be
        the admin's own tenant.
        """
        policy.can_invite_user(identity).enforce()

        tenant = await self._store.get_tenant_by_slug(tenant_slug)
        if tenant is None:
            raise NotFound(MSG_TENANT_NOT_FOUND, {"slug": tenant_slug})
        if tenant.id != identity.tenant_id:
            log.warning(
                "cross_tenant_invite",
                inviter_id=identity.user_id,
                inviter_tenant=identity.tenant_slug,
                target_tenant=tenant_slug,
            )

        password_hash = await self._hash_new_password(email, password)
        user = await self._store.create_user(
            email=email,
            password_hash=password_hash,
            role=role,
            tenant_id=tenant.id,
        )
        log.info("user_invited", user_id=user.id, tenant_id=tenant.id, role=role.value)
        return user, tenant

    async def bootstrap_admin(
        self,
        tenant_slug: str,
        email: str,
        password: str,
        tenant_name: str | None = None,
    ) -> tuple[User, Tenant]:
        """Create the first ADMIN of a tenant, registering the tenant if needed.

        Operator-only: no route calls this, because inviting requires an
        admin token and a fresh tenant has no admin yet.
        """
        tenant = await self._store.get_tenant_by_slug(tenant_slug)
        if tenant is None:
            tenant = await self.register_tenant(tenant_name or tenant_slug, tenant_slug)

        password_hash = await self._hash_new_password(email, password)
        user = await self._store.create_user(
            email=email,
            password_hash=password_hash,
            role=Role.ADMIN,
            tenant_id=tenant.id,
        )
        log.info("admin_bootstrapped", user_id=user.id, tenant_id=tenant.id)
        return user, tenant

    async def login(self, email: str | None, password: str | None) -> str:
        """Check credentials and issue a token with the user's current role and tenant."""
        if not email or not password:
            raise ValidationError(MSG_EMAIL_PASSWORD_REQUIRED)

        user = await self._store.get_user_by_email(email)
        if user is None:
            await verify_password_async(password, await self._get_dummy_hash())
            log.info("login_failed", reason="unknown_email")
            raise InvalidCredentials(MSG_INVALID_CREDENTIALS)

        if not await verify_password_async(password, user.password_hash):
            log.info("login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentials(MSG_INVALID_CREDENTIALS)

        tenant = await self._store.get_tenant(user.tenant_id)
        if tenant is None:
            # Orphaned user; treated like any other failed login
            log.error("login_tenant_missing", user_id=user.id, tenant_id=user.tenant_id)
            raise InvalidCredentials(MSG_INVALID_CREDENTIALS)

        token = self._jwt.issue(
            user_id=user.id,
            tenant_id=tenant.id,
            role=user.role,
            tenant_slug=tenant.slug,
        )
        log.info("login_success", user_id=user.id, tenant_id=tenant.id)
        return token

    async def upgrade_tenant(self, identity: Identity, slug: str) -> UpgradeResult:
        """Move a tenant to PRO. Upgrading a PRO tenant again is a no-op."""
        policy.can_upgrade_plan(identity, slug).enforce()

        tenant = await self._store.set_tenant_plan(slug, TenantPlan.PRO)
        if tenant is None:
            raise NotFound(MSG_TENANT_NOT_FOUND, {"slug": slug})

        log.info("plan_updated", tenant_id=tenant.id, new=tenant.plan.value, by=identity.user_id)
        return UpgradeResult(message=MSG_TENANT_UPGRADED, tenant=tenant)

    async def _get_dummy_hash(self) -> str:
        rounds = self._bcrypt_rounds
        if rounds not in _dummy_hashes:
            _dummy_hashes[rounds] = await hash_password_async(_DUMMY_PASSWORD, rounds=rounds)
        return _dummy_hashes[rounds]

    async def _hash_new_password(self, email: str, password: str) -> str:
        if not email or not password:
            raise ValidationError(MSG_EMAIL_PASSWORD_REQUIRED)
        if len(password.encode("utf-8")) > _MAX_PASSWORD_BYTES:
            raise ValidationError("Password must be at most 72 bytes")
        return await hash_password_async(password, self._bcrypt_rounds)
