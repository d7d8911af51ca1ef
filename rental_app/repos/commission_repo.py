import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from core.paginate import PageParams, paginator
from models.models import Commission
from schemas.schema import CommissionSearchFilters

COMMISSION_RELATIONS = (
    selectinload(Commission.property),
    selectinload(Commission.commissioner),
)


class CommissionRepo:
    def __init__(self, db):
        self.db = db

    async def get_commission_with_relations(
        self, commission_id: uuid.UUID
    ) -> Optional[Commission]:
        result = await self.db.execute(
            select(Commission)
            .options(*COMMISSION_RELATIONS)
            .where(Commission.id == commission_id)
        )
        return result.scalars().first()

    async def create(
        self,
        property_id: uuid.UUID,
        commissioner_id: uuid.UUID,
        amount: int,
        platform_fee: int,
    ) -> Commission:
        commission = Commission(
            property_id=property_id,
            commissioner_id=commissioner_id,
            amount=amount,
            platform_fee=platform_fee,
        )
        self.db.add(commission)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return await self.get_commission_with_relations(commission.id)

    async def search(self, filters: CommissionSearchFilters, params: PageParams):
        query = select(Commission)
        if filters.commissioner_id is not None:
            query = query.where(Commission.commissioner_id == filters.commissioner_id)
        if filters.property_id is not None:
            query = query.where(Commission.property_id == filters.property_id)
        query = query.order_by(Commission.created_at.desc(), Commission.id.desc())
        return await paginator.fetch(self.db, query, params, *COMMISSION_RELATIONS)
