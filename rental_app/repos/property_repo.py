import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from core.paginate import PageParams, paginator
from models.enums import PropertyType
from models.models import Media, Property
from schemas.schema import PropertySearchFilters

PROPERTY_RELATIONS = (
    selectinload(Property.owner),
    selectinload(Property.media),
)


class PropertyRepo:
    def __init__(self, db):
        self.db = db

    async def get_by_id(self, property_id: uuid.UUID) -> Optional[Property]:
        result = await self.db.execute(
            select(Property).where(Property.id == property_id)
        )
        return result.scalar_one_or_none()

    async def get_property_with_relations(
        self, property_id: uuid.UUID
    ) -> Optional[Property]:
        result = await self.db.execute(
            select(Property)
            .options(*PROPERTY_RELATIONS)
            .where(Property.id == property_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def create(
        self,
        owner_id: uuid.UUID,
        title: str,
        property_type: PropertyType,
        price: int,
        location: str,
        rooms: Optional[int] = None,
        media_urls: Optional[List[str]] = None,
    ) -> Property:
        new_property = Property(
            owner_id=owner_id,
            title=title,
            type=property_type,
            price=price,
            location=location,
            rooms=rooms,
        )
        new_property.media = [
            Media(url=url, position=index)
            for index, url in enumerate(media_urls or [])
        ]
        self.db.add(new_property)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return await self.get_property_with_relations(new_property.id)

    async def update(self, property_obj: Property, **fields) -> Property:
        for key, value in fields.items():
            setattr(property_obj, key, value)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return await self.get_property_with_relations(property_obj.id)

    async def mark_verified(self, property_obj: Property) -> Property:
        return await self.update(property_obj, verified=True)

    def _filtered(self, filters: PropertySearchFilters):
        query = select(Property)
        if filters.type is not None:
            query = query.where(Property.type == filters.type)
        if filters.min_price is not None:
            query = query.where(Property.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(Property.price <= filters.max_price)
        if filters.location:
            query = query.where(
                Property.location.icontains(filters.location, autoescape=True)
            )
        if filters.rooms is not None:
            query = query.where(Property.rooms == filters.rooms)
        if filters.status is not None:
            query = query.where(Property.status == filters.status)
        if filters.verified is not None:
            query = query.where(Property.verified.is_(filters.verified))
        return query

    async def search(self, filters: PropertySearchFilters, params: PageParams):
        query = self._filtered(filters).order_by(
            Property.created_at.desc(), Property.id.desc()
        )
        return await paginator.fetch(self.db, query, params, *PROPERTY_RELATIONS)

    async def list_by_owner(self, owner_id: uuid.UUID, params: PageParams):
        query = (
            select(Property)
            .where(Property.owner_id == owner_id)
            .order_by(Property.created_at.desc(), Property.id.desc())
        )
        return await paginator.fetch(self.db, query, params, *PROPERTY_RELATIONS)
