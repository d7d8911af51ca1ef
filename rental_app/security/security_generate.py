import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from core.exceptions import InvalidTokenError
from core.settings import settings
from models.enums import UserRole


@dataclass(frozen=True)
class Identity:
    user_id: uuid.UUID
    role: UserRole
    phone: str


class TokenService:
    def __init__(self, secret_key: str, algorithm: str, expires_in: timedelta):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: uuid.UUID, role: UserRole, phone: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "userId": str(user_id),
            "role": UserRole(role).value,
            "phone": phone,
            "type": "access",
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def issue_for(self, user) -> str:
        return self.issue(user_id=user.id, role=user.role, phone=user.phone)

    def verify(self, token: str) -> Identity:
        if not token:
            raise InvalidTokenError()
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenError("Token expired")
        except JWTError:
            raise InvalidTokenError()

        if payload.get("type") != "access":
            raise InvalidTokenError("Invalid token type")

        try:
            return Identity(
                user_id=uuid.UUID(payload["userId"]),
                role=UserRole(payload["role"]),
                phone=str(payload["phone"]),
            )
        except (KeyError, ValueError, TypeError):
            raise InvalidTokenError()


token_service = TokenService(
    secret_key=settings.JWT_SECRET_KEY,
    algorithm=settings.ALGORITHM,
    expires_in=settings.JWT_EXPIRES_IN,
)
