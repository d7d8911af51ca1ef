import logging
import uuid

from core.breaker import breaker
from core.exceptions import DuplicatePhoneError, InvalidCredentialsError, UserNotFoundError
from core.mapper import ORMMapper
from core.paginate import Page, PageParams
from core.settings import settings
from models.models import User
from repos.user_repo import UserRepo
from schemas.schema import UserCreate, UserPublicSchema

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db):
        self.repo: UserRepo = UserRepo(db)
        self.mapper: ORMMapper = ORMMapper()

    async def register(self, data: UserCreate) -> UserPublicSchema:
        async def handler():
            if await self.repo.get_by_phone(data.phone):
                raise DuplicatePhoneError()
            user = await self.repo.create(
                name=data.name,
                phone=data.phone,
                role=data.role,
                password=data.password,
                national_id=data.national_id,
                rounds=settings.BCRYPT_ROUNDS,
            )
            logger.info("Registered user %s as %s", user.id, user.role.value)
            return self.mapper.one(user, UserPublicSchema)

        return await breaker.call(handler)

    async def authenticate(self, phone: str, password: str) -> User:
        async def handler():
            user = await self.repo.get_by_phone(phone)
            if not user or not user.check_password(password):
                raise InvalidCredentialsError()
            return user

        return await breaker.call(handler)

    async def get_by_id(self, user_id: uuid.UUID) -> UserPublicSchema:
        async def handler():
            user = await self.repo.get_by_id(user_id)
            if not user:
                raise UserNotFoundError()
            return self.mapper.one(user, UserPublicSchema)

        return await breaker.call(handler)

    async def verify(self, user_id: uuid.UUID) -> UserPublicSchema:
        async def handler():
            user = await self.repo.get_by_id(user_id)
            if not user:
                raise UserNotFoundError()
            if not user.verified:
                user = await self.repo.mark_verified(user)
                logger.info("User %s verified", user.id)
            return self.mapper.one(user, UserPublicSchema)

        return await breaker.call(handler)

    async def list_pending_verification(
        self, params: PageParams
    ) -> Page[UserPublicSchema]:
        async def handler():
            page = await self.repo.search(params, verified=False)
            return self.mapper.page(page, UserPublicSchema)

        return await breaker.call(handler)

    async def list_all(self, params: PageParams) -> Page[UserPublicSchema]:
        async def handler():
            page = await self.repo.search(params)
            return self.mapper.page(page, UserPublicSchema)

        return await breaker.call(handler)
