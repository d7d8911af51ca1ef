import logging

from core.mapper import ORMMapper
from schemas.schema import LoginOut, UserLoginInput, UserPublicSchema
from security.security_generate import token_service

from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db):
        self.users: UserService = UserService(db)
        self.mapper: ORMMapper = ORMMapper()

    async def login(self, data: UserLoginInput) -> LoginOut:
        user = await self.users.authenticate(phone=data.phone, password=data.password)
        token = token_service.issue_for(user)
        logger.info("User %s logged in", user.id)
        return LoginOut(user=self.mapper.one(user, UserPublicSchema), token=token)
