from fastapi import Depends

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.schemas.auth.auth_context import AuthContext
from app.utils.get_user import get_current_user


def require_role(roles: list[str]):
    allowed = {r.lower() for r in roles}

    async def role_checker(user: AuthContext = Depends(get_current_user)):
        if user.role.value not in allowed:
            raise AppException(403, "Permission denied", ErrorCode.PERMISSION_DENIED)
        return user

    return role_checker


# Everyone except read-only customer users may change setup data
WRITE_ROLES = ["admin", "manager", "operator"]
ADMIN_ONLY = ["admin"]
AUDIT_ROLES = ["admin", "manager"]
