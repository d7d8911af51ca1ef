import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_identity, require_admin
from core.get_db import get_db_async
from core.localization import Language, get_language, translate
from core.paginate import PageParams, get_page_params
from core.response import send_paginated_success, send_success
from core.safe_handler import safe_handler
from models.enums import MAX_DB_INT, PropertyStatus, PropertyType
from schemas.schema import PropertyCreate, PropertySearchFilters, PropertyUpdate
from security.security_generate import Identity
from services.property_service import PropertyService

router = APIRouter(prefix="/properties", tags=["Property Management"])


def property_filters(
    type: Optional[PropertyType] = Query(default=None),
    min_price: Optional[int] = Query(
        default=None, alias="minPrice", ge=0, le=MAX_DB_INT
    ),
    max_price: Optional[int] = Query(
        default=None, alias="maxPrice", ge=0, le=MAX_DB_INT
    ),
    location: Optional[str] = Query(default=None),
    rooms: Optional[int] = Query(default=None, ge=0, le=MAX_DB_INT),
    status: Optional[PropertyStatus] = Query(default=None),
    verified: Optional[bool] = Query(default=None),
) -> PropertySearchFilters:
    return PropertySearchFilters(
        type=type,
        min_price=min_price,
        max_price=max_price,
        location=location.strip() if location else None,
        rooms=rooms,
        status=status,
        verified=verified,
    )


@router.post("", status_code=201)
@safe_handler
async def create_property(
    data: PropertyCreate,
    db: AsyncSession = Depends(get_db_async),
    identity: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    prop = await PropertyService(db).create_property(data=data, identity=identity)
    return send_success(translate("property.created", lang), prop, 201)


@router.get("")
@safe_handler
async def search_properties(
    filters: PropertySearchFilters = Depends(property_filters),
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db_async),
    lang: Language = Depends(get_language),
):
    page = await PropertyService(db).search(filters, params)
    return send_paginated_success(translate("property.list", lang), page)


@router.get("/pending/verification")
@safe_handler
async def pending_properties(
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    page = await PropertyService(db).list_pending_verification(params)
    return send_paginated_success(translate("property.pending", lang), page)


@router.get("/{property_id}")
@safe_handler
async def get_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    lang: Language = Depends(get_language),
):
    prop = await PropertyService(db).get_property(property_id)
    return send_success(translate("property.retrieved", lang), prop)


@router.patch("/{property_id}")
@safe_handler
async def update_property(
    property_id: uuid.UUID,
    data: PropertyUpdate,
    db: AsyncSession = Depends(get_db_async),
    identity: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    prop = await PropertyService(db).update_property(
        property_id=property_id, data=data, identity=identity
    )
    return send_success(translate("property.updated", lang), prop)


@router.patch("/{property_id}/verify")
@safe_handler
async def verify_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    prop = await PropertyService(db).verify_property(property_id)
    return send_success(translate("property.verified", lang), prop)
