"""Create the default tenant and its first admin user.

Usage:
    python -m app.scripts.seed_tenant --email admin@acme.com \
        --first-name Ada --last-name Admin [--provider-user-id <uuid>]

The admin row is linked to the identity provider on first login when no
provider id is given here.
"""

import argparse
import asyncio

from sqlalchemy import select

from app.core.config import DEFAULT_TENANT_SLUG
from app.core.db import AsyncSessionLocal
from app.models.enums.user_role import UserRole
from app.models.tenancy.tenant_models import Tenant
from app.models.users.user_models import User
from app.utils.logger import get_logger

logger = get_logger("scripts.seed_tenant")


async def seed_tenant(
    email: str,
    first_name: str,
    last_name: str,
    tenant_name: str,
    provider_user_id: str | None = None,
):
    async with AsyncSessionLocal() as session:
        tenant = await session.scalar(
            select(Tenant).where(Tenant.slug == DEFAULT_TENANT_SLUG)
        )
        if not tenant:
            tenant = Tenant(name=tenant_name, slug=DEFAULT_TENANT_SLUG)
            session.add(tenant)
            await session.flush()
            logger.info("Tenant created", extra={"slug": DEFAULT_TENANT_SLUG})

        admin = await session.scalar(select(User).where(User.email == email.lower()))
        if admin:
            logger.info("Admin user already exists", extra={"email": email})
        else:
            session.add(
                User(
                    tenant_id=tenant.id,
                    supabase_user_id=provider_user_id,
                    email=email.lower(),
                    first_name=first_name,
                    last_name=last_name,
                    role=UserRole.admin,
                )
            )
            logger.info("Admin user created", extra={"email": email})

        await session.commit()


def main():
    parser = argparse.ArgumentParser(description="Seed the default tenant")
    parser.add_argument("--email", required=True)
    parser.add_argument("--first-name", required=True)
    parser.add_argument("--last-name", required=True)
    parser.add_argument("--tenant-name", default="Default Tenant")
    parser.add_argument("--provider-user-id", default=None)
    args = parser.parse_args()

    asyncio.run(
        seed_tenant(
            args.email,
            args.first_name,
            args.last_name,
            args.tenant_name,
            args.provider_user_id,
        )
    )


if __name__ == "__main__":
    main()
