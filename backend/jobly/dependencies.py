from fastapi import Depends, Header

from jobly.exceptions import ErrorKind, JoblyError
from jobly.services.auth_service import auth_service


async def get_current_user(authorization: str | None = Header(None)) -> dict | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return auth_service.resolve_token(authorization[7:])


async def require_admin(user: dict | None = Depends(get_current_user)) -> dict:
    if user is None or not user["is_admin"]:
        raise JoblyError(ErrorKind.UNAUTHORIZED, "Admin privileges required")
    return user
