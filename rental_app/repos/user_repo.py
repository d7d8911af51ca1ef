import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.exceptions import DuplicatePhoneError
from core.paginate import PageParams, paginator
from models.enums import UserRole
from models.models import User


class UserRepo:
    def __init__(self, db):
        self.db = db

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_phone(self, phone: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    async def create(
        self,
        name: str,
        phone: str,
        role: UserRole,
        password: str,
        national_id: Optional[str] = None,
        verified: bool = False,
        rounds: int = 12,
    ) -> User:
        new_user = User(
            name=name,
            phone=phone,
            role=role,
            national_id=national_id,
            verified=verified,
        )
        new_user.set_password(password, rounds=rounds)
        self.db.add(new_user)
        try:
            await self.db.commit()
            await self.db.refresh(new_user)
            return new_user
        except IntegrityError:
            await self.db.rollback()
            raise DuplicatePhoneError()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def mark_verified(self, user: User) -> User:
        user.verified = True
        try:
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def search(self, params: PageParams, verified: Optional[bool] = None):
        query = select(User)
        if verified is not None:
            query = query.where(User.verified.is_(verified))
        query = query.order_by(User.created_at.desc(), User.id.desc())
        return await paginator.fetch(self.db, query, params)
