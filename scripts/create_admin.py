#!/usr/bin/env python3
"""Create the first ADMIN user of a tenant (registering the tenant if needed).

The API cannot do this itself: inviting users requires an admin token, and a
freshly registered tenant has no admin yet.

Usage:
    python scripts/create_admin.py --slug acme --email admin@acme.io
    python scripts/create_admin.py --slug acme --name "Acme Inc" --email admin@acme.io --password s3cret
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import get_settings
from notely.auth.tokens import JWTManager
from notely.core.exceptions import NotelyBaseError
from notely.core.logging import get_logger, setup_logging
from notely.services.provisioning import ProvisioningService
from notely.store import open_store
from notely.store.schema import close_engine

log = get_logger(__name__)


async def main(args: argparse.Namespace) -> int:
    setup_logging(json_output=False)
    settings = get_settings()
    password = args.password or getpass.getpass("Admin password: ")

    store = await open_store(settings)
    service = ProvisioningService(
        store,
        JWTManager(
            secret=settings.notely_jwt_secret.get_secret_value(),
            expiry_hours=settings.notely_jwt_expiry_hours,
        ),
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    try:
        user, tenant = await service.bootstrap_admin(
            tenant_slug=args.slug,
            email=args.email,
            password=password,
            tenant_name=args.name,
        )
    except NotelyBaseError as exc:
        log.error("admin_bootstrap_failed", error=exc.message)
        return 1
    finally:
        await store.close()
        await close_engine()

    print(f"tenant_id: {tenant.id} ({tenant.slug}, {tenant.plan.value})")
    print(f"admin_id : {user.id} ({user.email})")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bootstrap a tenant admin")
    parser.add_argument("--slug", required=True, help="Tenant slug (created if missing)")
    parser.add_argument("--name", default=None, help="Tenant name when creating it")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", default=None, help="Prompted for when omitted")
    sys.exit(asyncio.run(main(parser.parse_args())))
