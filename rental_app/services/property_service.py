import logging
import uuid

from core.breaker import breaker
from core.check_permission import is_admin
from core.exceptions import (
    NotPropertyOwnerError,
    OwnerNotFoundError,
    OwnerNotVerifiedError,
    PropertyNotFoundError,
    UserNotFoundError,
)
from core.mapper import ORMMapper
from core.paginate import Page, PageParams
from repos.property_repo import PropertyRepo
from repos.user_repo import UserRepo
from schemas.schema import (
    PropertyCreate,
    PropertyOut,
    PropertySearchFilters,
    PropertyUpdate,
)
from security.security_generate import Identity

logger = logging.getLogger(__name__)


class PropertyService:
    def __init__(self, db):
        self.repo: PropertyRepo = PropertyRepo(db)
        self.user_repo: UserRepo = UserRepo(db)
        self.mapper: ORMMapper = ORMMapper()

    async def create_property(
        self, data: PropertyCreate, identity: Identity
    ) -> PropertyOut:
        async def handler():
            owner_id = identity.user_id
            if data.owner_id and is_admin(identity):
                owner_id = data.owner_id

            owner = await self.user_repo.get_by_id(owner_id)
            if not owner:
                raise OwnerNotFoundError()
            if not owner.verified:
                raise OwnerNotVerifiedError()

            prop = await self.repo.create(
                owner_id=owner.id,
                title=data.title,
                property_type=data.type,
                price=data.price,
                location=data.location,
                rooms=data.rooms,
                media_urls=[str(url) for url in data.media],
            )
            logger.info("Property %s created for owner %s", prop.id, owner.id)
            return self.mapper.one(prop, PropertyOut)

        return await breaker.call(handler)

    async def search(
        self, filters: PropertySearchFilters, params: PageParams
    ) -> Page[PropertyOut]:
        async def handler():
            page = await self.repo.search(filters, params)
            return self.mapper.page(page, PropertyOut)

        return await breaker.call(handler)

    async def get_property(self, property_id: uuid.UUID) -> PropertyOut:
        async def handler():
            prop = await self.repo.get_property_with_relations(property_id)
            if not prop:
                raise PropertyNotFoundError()
            return self.mapper.one(prop, PropertyOut)

        return await breaker.call(handler)

    async def update_property(
        self, property_id: uuid.UUID, data: PropertyUpdate, identity: Identity
    ) -> PropertyOut:
        async def handler():
            prop = await self.repo.get_by_id(property_id)
            if not prop:
                raise PropertyNotFoundError()
            if prop.owner_id != identity.user_id and not is_admin(identity):
                raise NotPropertyOwnerError()

            update_data = data.model_dump(exclude_unset=True)
            if not update_data:
                prop = await self.repo.get_property_with_relations(property_id)
                return self.mapper.one(prop, PropertyOut)

            prop = await self.repo.update(prop, **update_data)
            logger.info(
                "Property %s updated by %s: %s",
                property_id,
                identity.user_id,
                sorted(update_data),
            )
            return self.mapper.one(prop, PropertyOut)

        return await breaker.call(handler)

    async def verify_property(self, property_id: uuid.UUID) -> PropertyOut:
        async def handler():
            prop = await self.repo.get_by_id(property_id)
            if not prop:
                raise PropertyNotFoundError()
            if prop.verified:
                prop = await self.repo.get_property_with_relations(property_id)
            else:
                prop = await self.repo.mark_verified(prop)
                logger.info("Property %s verified", property_id)
            return self.mapper.one(prop, PropertyOut)

        return await breaker.call(handler)

    async def list_pending_verification(
        self, params: PageParams
    ) -> Page[PropertyOut]:
        return await self.search(PropertySearchFilters(verified=False), params)

    async def list_by_owner(
        self, owner_id: uuid.UUID, params: PageParams
    ) -> Page[PropertyOut]:
        async def handler():
            if not await self.user_repo.get_by_id(owner_id):
                raise UserNotFoundError()
            page = await self.repo.list_by_owner(owner_id, params)
            return self.mapper.page(page, PropertyOut)

        return await breaker.call(handler)
