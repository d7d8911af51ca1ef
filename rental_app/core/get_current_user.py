from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from models.enums import UserRole
from security.security_generate import Identity, token_service

from .check_permission import check_role
from .exceptions import MissingTokenError

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    if credentials is None:
        if request.headers.get("Authorization"):
            raise MissingTokenError()
        return None

    identity = token_service.verify(credentials.credentials)
    request.state.identity = identity
    return identity


async def get_current_identity(
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> Identity:
    if identity is None:
        raise MissingTokenError()
    return identity


def require_roles(*roles: UserRole):
    allowed = frozenset(roles)

    async def role_checker(
        identity: Optional[Identity] = Depends(get_optional_identity),
    ) -> Identity:
        return check_role(identity, allowed)

    return role_checker


require_admin = require_roles(UserRole.ADMIN)
