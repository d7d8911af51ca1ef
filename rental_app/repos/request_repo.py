import uuid
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from core.exceptions import DuplicatePendingRequestError
from core.paginate import PageParams, paginator
from models.enums import PropertyStatus, RequestStatus
from models.models import Property, RentalRequest, utcnow
from schemas.schema import RequestSearchFilters

REQUEST_RELATIONS = (
    selectinload(RentalRequest.tenant),
    selectinload(RentalRequest.property).selectinload(Property.owner),
    selectinload(RentalRequest.property).selectinload(Property.media),
)

PENDING_UNIQUE_MARKERS = (
    "uq_requests_pending_tenant_property",
    "requests.tenant_id, requests.property_id",
)


class RequestRepo:
    def __init__(self, db):
        self.db = db

    async def get_by_id(self, request_id: uuid.UUID) -> Optional[RentalRequest]:
        result = await self.db.execute(
            select(RentalRequest)
            .where(RentalRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_request_with_relations(
        self, request_id: uuid.UUID
    ) -> Optional[RentalRequest]:
        result = await self.db.execute(
            select(RentalRequest)
            .options(*REQUEST_RELATIONS)
            .where(RentalRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_pending(
        self, tenant_id: uuid.UUID, property_id: uuid.UUID
    ) -> Optional[RentalRequest]:
        result = await self.db.execute(
            select(RentalRequest).where(
                RentalRequest.tenant_id == tenant_id,
                RentalRequest.property_id == property_id,
                RentalRequest.status == RequestStatus.PENDING,
            )
        )
        return result.scalars().first()

    async def create(
        self,
        tenant_id: uuid.UUID,
        property_id: uuid.UUID,
        message: Optional[str] = None,
    ) -> RentalRequest:
        new_request = RentalRequest(
            tenant_id=tenant_id,
            property_id=property_id,
            message=message,
            status=RequestStatus.PENDING,
        )
        self.db.add(new_request)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if any(marker in str(e.orig) for marker in PENDING_UNIQUE_MARKERS):
                raise DuplicatePendingRequestError()
            raise
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return await self.get_request_with_relations(new_request.id)

    async def _advance(
        self,
        request_id: uuid.UUID,
        expected: RequestStatus,
        **values,
    ) -> bool:
        result = await self.db.execute(
            update(RentalRequest)
            .where(
                RentalRequest.id == request_id,
                RentalRequest.status == expected,
            )
            .values(status=expected.next_status, updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def _mark_property_rented(self, property_id: uuid.UUID) -> None:
        await self.db.execute(
            update(Property)
            .where(Property.id == property_id)
            .values(status=PropertyStatus.RENTED, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )

    async def connect(self, request_id: uuid.UUID, admin_id: uuid.UUID) -> bool:
        """Move a PENDING request to CONNECTED.

        Returns False when the request was no longer PENDING at write time.
        """
        try:
            moved = await self._advance(
                request_id, RequestStatus.PENDING, admin_id=admin_id
            )
            if not moved:
                await self.db.rollback()
                return False
            await self.db.commit()
            self.db.expire_all()
            return True
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def complete(self, request_obj: RentalRequest) -> bool:
        """Mark the request COMPLETED and its property RENTED in one transaction."""
        try:
            moved = await self._advance(request_obj.id, RequestStatus.CONNECTED)
            if not moved:
                await self.db.rollback()
                return False
            await self._mark_property_rented(request_obj.property_id)
            await self.db.commit()
            self.db.expire_all()
            return True
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def search(self, filters: RequestSearchFilters, params: PageParams):
        query = select(RentalRequest)
        if filters.status is not None:
            query = query.where(RentalRequest.status == filters.status)
        if filters.tenant_id is not None:
            query = query.where(RentalRequest.tenant_id == filters.tenant_id)
        if filters.property_id is not None:
            query = query.where(RentalRequest.property_id == filters.property_id)
        query = query.order_by(RentalRequest.created_at.desc(), RentalRequest.id.desc())
        return await paginator.fetch(self.db, query, params, *REQUEST_RELATIONS)
