from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession
from app.models.support.activity_models import UserActivity
from app.constants.activity_templates import ACTIVITY_TEMPLATES
from app.constants.activity_codes import ActivityCode
from app.schemas.auth.auth_context import AuthContext


async def emit_activity(
    db: AsyncSession,
    *,
    actor: AuthContext,
    code: ActivityCode,
    **context,
):
    """Stage an audit row; it commits with the caller's transaction."""
    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    try:
        message = template.format(**actor.actor, **context)
    except KeyError as e:
        raise ValueError(
            f"Missing activity context key: {e.args[0]} for {code}"
        )

    db.add(
        UserActivity(
            tenant_id=actor.tenant_id,
            user_id=actor.user_id,
            username_snapshot=actor.email,
            code=code.value,
            message=message,
        )
    )


def _plain(value):
    return value.value if isinstance(value, Enum) else value


def describe_changes(before: dict, after: dict) -> str:
    changes = [
        f"{field}: '{_plain(before.get(field))}' → '{_plain(value)}'"
        for field, value in after.items()
        if before.get(field) != value
    ]
    return ", ".join(changes) or "no visible changes"
