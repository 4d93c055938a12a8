"""Tests for the tenant and role policy rules."""

from __future__ import annotations

import pytest

from notely import policy
from notely.core.exceptions import Forbidden, NotFound, QuotaExceeded
from notely.core.types import Identity, Note, Tenant, TenantPlan


def _note(tenant_id: str) -> Note:
    return Note(id="n1", title="t", content="c", tenant_id=tenant_id, created_by="someone")


class TestInviteAndUpgrade:
    def test_admin_may_invite(self, admin_identity: Identity) -> None:
        assert policy.can_invite_user(admin_identity).allowed

    def test_member_may_not_invite(self, member_identity: Identity) -> None:
        decision = policy.can_invite_user(member_identity)
        assert not decision.allowed
        with pytest.raises(Forbidden, match="Only Admin can invite users"):
            decision.enforce()

    def test_admin_may_upgrade_own_tenant(self, admin_identity: Identity) -> None:
        assert policy.can_upgrade_plan(admin_identity, "acme").allowed

    def test_admin_slug_is_not_compared(self, admin_identity: Identity) -> None:
        assert policy.can_upgrade_plan(admin_identity, "globex").allowed

    def test_member_may_not_upgrade(self, member_identity: Identity) -> None:
        with pytest.raises(Forbidden, match="Only Admin can upgrade plan"):
            policy.can_upgrade_plan(member_identity, "acme").enforce()


class TestCreateNoteQuota:
    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_free_under_limit(self, member_identity: Identity, count: int) -> None:
        tenant = Tenant(id="t-acme", name="Acme", slug="acme", plan=TenantPlan.FREE)
        assert policy.can_create_note(member_identity, tenant, count).allowed

    @pytest.mark.parametrize("count", [3, 4, 10])
    def test_free_at_or_over_limit(self, member_identity: Identity, count: int) -> None:
        tenant = Tenant(id="t-acme", name="Acme", slug="acme", plan=TenantPlan.FREE)
        decision = policy.can_create_note(member_identity, tenant, count)
        assert isinstance(decision.denial, QuotaExceeded)
        assert decision.denial.status_code == 403

    def test_pro_unlimited(self, member_identity: Identity) -> None:
        tenant = Tenant(id="t-acme", name="Acme", slug="acme", plan=TenantPlan.PRO)
        assert policy.can_create_note(member_identity, tenant, 10_000).allowed

    def test_plan_limits_table(self) -> None:
        assert policy.note_limit(TenantPlan.FREE) == 3
        assert policy.note_limit(TenantPlan.PRO) is None


class TestAccessNote:
    def test_same_tenant(self, member_identity: Identity) -> None:
        assert policy.can_access_note(member_identity, _note("t-acme")).allowed

    def test_other_tenant_is_not_found(self, admin_identity: Identity) -> None:
        decision = policy.can_access_note(admin_identity, _note("t-globex"))
        assert isinstance(decision.denial, NotFound)
        assert decision.denial.message == "Note not found"

    def test_missing_note(self, member_identity: Identity) -> None:
        assert isinstance(policy.can_access_note(member_identity, None).denial, NotFound)
