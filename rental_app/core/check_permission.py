from typing import Iterable, Optional

from models.enums import UserRole
from security.security_generate import Identity

from .exceptions import ForbiddenError, UnauthenticatedError


def has_role(identity: Identity, allowed: Iterable[UserRole]) -> bool:
    return identity.role in frozenset(allowed)


def check_role(identity: Optional[Identity], allowed: Iterable[UserRole]) -> Identity:
    """Gate an identity against a set of permitted roles.

    Raises UnauthenticatedError when no identity is attached and
    ForbiddenError when the identity's role is outside ``allowed``.
    """
    if identity is None:
        raise UnauthenticatedError()
    if not has_role(identity, allowed):
        raise ForbiddenError()
    return identity


def is_admin(identity: Optional[Identity]) -> bool:
    return identity is not None and identity.role == UserRole.ADMIN
