"""Tests for API schemas: camelCase wire format and entity conversion."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from notely.api.models.schemas import NoteIn, NoteOut, TenantCreated, TenantOut, UserInvite
from notely.core.types import Note, Role, Tenant, TenantPlan


class TestWireFormat:
    def test_note_out_dumps_camel_case(self) -> None:
        note = Note(id="n1", title="T", content="C", tenant_id="t1", created_by="u1")
        data = NoteOut.from_note(note).model_dump(by_alias=True)
        assert data["tenantId"] == "t1"
        assert data["createdBy"] == "u1"
        assert "tenant_id" not in data

    def test_tenant_created(self) -> None:
        data = TenantCreated(tenant_id="t1", name="Acme", slug="acme").model_dump(by_alias=True)
        assert data == {"tenantId": "t1", "name": "Acme", "slug": "acme"}

    def test_tenant_out_plan(self) -> None:
        tenant = Tenant(id="t1", name="Acme", slug="acme", plan=TenantPlan.PRO)
        data = TenantOut.from_tenant(tenant).model_dump(by_alias=True, mode="json")
        assert data["plan"] == "PRO"
        assert "createdAt" in data


class TestRequestBodies:
    def test_invite_accepts_camel_case(self) -> None:
        body = UserInvite.model_validate(
            {"email": "a@acme.io", "password": "pw", "role": "ADMIN", "tenantSlug": "acme"}
        )
        assert body.tenant_slug == "acme"
        assert body.role is Role.ADMIN

    def test_invite_role_defaults_to_member(self) -> None:
        body = UserInvite.model_validate({"email": "a@acme.io", "password": "pw", "tenantSlug": "acme"})
        assert body.role is Role.MEMBER

    def test_invite_rejects_unknown_role(self) -> None:
        with pytest.raises(ValidationError):
            UserInvite.model_validate(
                {"email": "a@acme.io", "password": "pw", "role": "OWNER", "tenantSlug": "acme"}
            )

    def test_note_requires_title_and_content(self) -> None:
        with pytest.raises(ValidationError):
            NoteIn.model_validate({"title": "only"})
