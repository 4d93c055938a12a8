"""DB-backed store: tenants, users and notes in PostgreSQL via SQLAlchemy Core."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine
from uuid_extensions import uuid7

from notely.core.constants import MSG_EMAIL_TAKEN, MSG_SLUG_TAKEN
from notely.core.exceptions import DuplicateError
from notely.core.interfaces import NoteStore
from notely.core.logging import get_logger
from notely.core.types import Note, Role, Tenant, TenantPlan, User

log = get_logger(__name__)


class SqlNoteStore(NoteStore):
    """Async PostgreSQL-backed storage. Every method runs in its own transaction."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    # ── Tenants ──────────────────────────────────────────────────

    async def create_tenant(self, name: str, slug: str, plan: TenantPlan = TenantPlan.FREE) -> Tenant:
        tenant = Tenant(id=str(uuid7()), name=name, slug=slug, plan=plan)
        try:
            async with self._engine.begin() as conn:
                await conn.execute(
                    text(
                        """
                        INSERT INTO tenants (id, name, slug, plan, created_at)
                        VALUES (:id, :name, :slug, :plan, :now)
                        """
                    ),
                    {
                        "id": tenant.id,
                        "name": name,
                        "slug": slug,
                        "plan": plan.value,
                        "now": tenant.created_at,
                    },
                )
        except IntegrityError as exc:
            log.warning("tenant_slug_conflict", slug=slug)
            raise DuplicateError(MSG_SLUG_TAKEN, {"slug": slug}) from exc
        return tenant

    async def get_tenant(self, tenant_id: str) -> Tenant | None:
        async with self._engine.begin() as conn:
            row = await conn.execute(
                text("SELECT * FROM tenants WHERE id = :tid"),
                {"tid": tenant_id},
            )
            r = row.mappings().first()
        return self._row_to_tenant(r) if r is not None else None

    async def get_tenant_by_slug(self, slug: str) -> Tenant | None:
        async with self._engine.begin() as conn:
            row = await conn.execute(
                text("SELECT * FROM tenants WHERE slug = :slug"),
                {"slug": slug},
            )
            r = row.mappings().first()
        return self._row_to_tenant(r) if r is not None else None

    async def set_tenant_plan(self, slug: str, plan: TenantPlan) -> Tenant | None:
        async with self._engine.begin() as conn:
            row = await conn.execute(
                text("UPDATE tenants SET plan = :plan WHERE slug = :slug RETURNING *"),
                {"plan": plan.value, "slug": slug},
            )
            r = row.mappings().first()
        return self._row_to_tenant(r) if r is not None else None

    # ── Users ────────────────────────────────────────────────────

    async def create_user(self, email: str, password_hash: str, role: Role, tenant_id: str) -> User:
        user = User(
            id=str(uuid7()),
            email=email,
            password_hash=password_hash,
            role=role,
            tenant_id=tenant_id,
        )
        try:
            async with self._engine.begin() as conn:
                await conn.execute(
                    text(
                        """
                        INSERT INTO users (id, email, password_hash, role, tenant_id, created_at)
                        VALUES (:id, :email, :hash, :role, :tid, :now)
                        """
                    ),
                    {
                        "id": user.id,
                        "email": email,
                        "hash": password_hash,
                        "role": role.value,
                        "tid": tenant_id,
                        "now": user.created_at,
                    },
                )
        except IntegrityError as exc:
            log.warning("user_email_conflict", tenant_id=tenant_id)
            raise DuplicateError(MSG_EMAIL_TAKEN) from exc
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        async with self._engine.begin() as conn:
            row = await conn.execute(
                text("SELECT * FROM users WHERE email = :email"),
                {"email": email},
            )
            r = row.mappings().first()
        return self._row_to_user(r) if r is not None else None

    # ── Notes ────────────────────────────────────────────────────

    async def count_notes(self, tenant_id: str) -> int:
        async with self._engine.begin() as conn:
            result = await conn.execute(
                text("SELECT COUNT(*) FROM notes WHERE tenant_id = :tid"),
                {"tid": tenant_id},
            )
            return int(result.scalar_one())

    async def create_note(self, title: str, content: str, tenant_id: str, created_by: str) -> Note:
        note = Note(
            id=str(uuid7()),
            title=title,
            content=content,
            tenant_id=tenant_id,
            created_by=created_by,
        )
        async with self._engine.begin() as conn:
            await conn.execute(
                text(
                    """
                    INSERT INTO notes
                        (id, title, content, tenant_id, created_by, created_at, updated_at)
                    VALUES
                        (:id, :title, :content, :tid, :uid, :created, :updated)
                    """
                ),
                {
                    "id": note.id,
                    "title": title,
                    "content": content,
                    "tid": tenant_id,
                    "uid": created_by,
                    "created": note.created_at,
                    "updated": note.updated_at,
                },
            )
        return note

    async def list_notes(self, tenant_id: str) -> list[Note]:
        async with self._engine.begin() as conn:
            result = await conn.execute(
                text(
                    "SELECT * FROM notes WHERE tenant_id = :tid "
                    "ORDER BY created_at, id"
                ),
                {"tid": tenant_id},
            )
            rows = result.mappings().all()
        return [self._row_to_note(r) for r in rows]

    async def get_note(self, note_id: str) -> Note | None:
        async with self._engine.begin() as conn:
            row = await conn.execute(
                text("SELECT * FROM notes WHERE id = :nid"),
                {"nid": note_id},
            )
            r = row.mappings().first()
        return self._row_to_note(r) if r is not None else None

    async def update_note(self, note_id: str, title: str, content: str) -> Note | None:
        async with self._engine.begin() as conn:
            row = await conn.execute(
                text(
                    "UPDATE notes SET title = :title, content = :content, "
                    "updated_at = :now WHERE id = :nid RETURNING *"
                ),
                {
                    "title": title,
                    "content": content,
                    "now": datetime.now(timezone.utc),
                    "nid": note_id,
                },
            )
            r = row.mappings().first()
        return self._row_to_note(r) if r is not None else None

    async def delete_note(self, note_id: str) -> bool:
        async with self._engine.begin() as conn:
            result = await conn.execute(
                text("DELETE FROM notes WHERE id = :nid"),
                {"nid": note_id},
            )
        return result.rowcount > 0

    # ── Row mapping ──────────────────────────────────────────────

    @staticmethod
    def _row_to_tenant(r: object) -> Tenant:
        """Convert a DB row mapping to a Tenant dataclass."""
        plan_str: str = r["plan"]  # type: ignore[index]
        try:
            plan = TenantPlan(plan_str)
        except ValueError:
            plan = TenantPlan.FREE

        return Tenant(
            id=r["id"],  # type: ignore[index]
            name=r["name"],  # type: ignore[index]
            slug=r["slug"],  # type: ignore[index]
            plan=plan,
            created_at=r["created_at"],  # type: ignore[index]
        )

    @staticmethod
    def _row_to_user(r: object) -> User:
        return User(
            id=r["id"],  # type: ignore[index]
            email=r["email"],  # type: ignore[index]
            password_hash=r["password_hash"],  # type: ignore[index]
            role=Role(r["role"]),  # type: ignore[index]
            tenant_id=r["tenant_id"],  # type: ignore[index]
            created_at=r["created_at"],  # type: ignore[index]
        )

    @staticmethod
    def _row_to_note(r: object) -> Note:
        return Note(
            id=r["id"],  # type: ignore[index]
            title=r["title"],  # type: ignore[index]
            content=r["content"],  # type: ignore[index]
            tenant_id=r["tenant_id"],  # type: ignore[index]
            created_by=r["created_by"],  # type: ignore[index]
            created_at=r["created_at"],  # type: ignore[index]
            updated_at=r["updated_at"],  # type: ignore[index]
        )
