import logging
import uuid

from core.breaker import breaker
from core.check_permission import is_admin
from core.exceptions import (
    DuplicatePendingRequestError,
    ForbiddenError,
    InvalidStateTransitionError,
    PropertyNotFoundError,
    PropertyUnavailableError,
    RequestNotFoundError,
    TenantNotFoundError,
    TenantNotVerifiedError,
)
from core.mapper import ORMMapper
from core.paginate import Page, PageParams
from models.enums import PropertyStatus, RequestStatus, UserRole
from repos.property_repo import PropertyRepo
from repos.request_repo import RequestRepo
from repos.user_repo import UserRepo
from schemas.schema import RequestCreate, RequestOut, RequestSearchFilters
from security.security_generate import Identity

logger = logging.getLogger(__name__)


class RequestService:
    def __init__(self, db):
        self.repo: RequestRepo = RequestRepo(db)
        self.user_repo: UserRepo = UserRepo(db)
        self.property_repo: PropertyRepo = PropertyRepo(db)
        self.mapper: ORMMapper = ORMMapper()

    async def create_request(
        self, data: RequestCreate, identity: Identity
    ) -> RequestOut:
        async def handler():
            tenant_id = identity.user_id
            if data.tenant_id and is_admin(identity):
                tenant_id = data.tenant_id

            tenant = await self.user_repo.get_by_id(tenant_id)
            if not tenant:
                raise TenantNotFoundError()
            if not tenant.verified:
                raise TenantNotVerifiedError()

            prop = await self.property_repo.get_by_id(data.property_id)
            if not prop:
                raise PropertyNotFoundError()
            if prop.status != PropertyStatus.AVAILABLE:
                raise PropertyUnavailableError()

            if await self.repo.get_pending(tenant.id, prop.id):
                raise DuplicatePendingRequestError()

            rental_request = await self.repo.create(
                tenant_id=tenant.id, property_id=prop.id, message=data.message
            )
            logger.info(
                "Request %s opened by tenant %s for property %s",
                rental_request.id,
                tenant.id,
                prop.id,
            )
            return self.mapper.one(rental_request, RequestOut)

        return await breaker.call(handler)

    async def _require_status(
        self, request_id: uuid.UUID, expected: RequestStatus
    ):
        rental_request = await self.repo.get_by_id(request_id)
        if not rental_request:
            raise RequestNotFoundError()
        if rental_request.status != expected:
            raise InvalidStateTransitionError(
                f"Request must be {expected.value} to move to "
                f"{expected.next_status.value} (current: {rental_request.status.value})"
            )
        return rental_request

    async def connect(self, request_id: uuid.UUID, admin_id: uuid.UUID) -> RequestOut:
        async def handler():
            admin = await self.user_repo.get_by_id(admin_id)
            if not admin or admin.role != UserRole.ADMIN:
                raise ForbiddenError("Only an admin can connect requests")

            await self._require_status(request_id, RequestStatus.PENDING)
            if not await self.repo.connect(request_id, admin_id):
                raise InvalidStateTransitionError("Request is no longer PENDING")

            logger.info("Request %s connected by admin %s", request_id, admin_id)
            rental_request = await self.repo.get_request_with_relations(request_id)
            return self.mapper.one(rental_request, RequestOut)

        return await breaker.call(handler)

    async def complete(self, request_id: uuid.UUID) -> RequestOut:
        async def handler():
            rental_request = await self._require_status(
                request_id, RequestStatus.CONNECTED
            )
            property_id = rental_request.property_id
            if not await self.repo.complete(rental_request):
                raise InvalidStateTransitionError("Request is no longer CONNECTED")

            logger.info(
                "Request %s completed; property %s rented",
                request_id,
                property_id,
            )
            rental_request = await self.repo.get_request_with_relations(request_id)
            return self.mapper.one(rental_request, RequestOut)

        return await breaker.call(handler)

    async def get_request(self, request_id: uuid.UUID) -> RequestOut:
        async def handler():
            rental_request = await self.repo.get_request_with_relations(request_id)
            if not rental_request:
                raise RequestNotFoundError()
            return self.mapper.one(rental_request, RequestOut)

        return await breaker.call(handler)

    async def search(
        self, filters: RequestSearchFilters, params: PageParams
    ) -> Page[RequestOut]:
        async def handler():
            page = await self.repo.search(filters, params)
            return self.mapper.page(page, RequestOut)

        return await breaker.call(handler)
