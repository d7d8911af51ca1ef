import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_identity
from core.get_db import get_db_async
from core.localization import Language, get_language, translate
from core.paginate import PageParams, get_page_params
from core.response import send_paginated_success, send_success
from core.safe_handler import safe_handler
from schemas.schema import CommissionCreate, CommissionSearchFilters
from security.security_generate import Identity
from services.commission_service import CommissionService

router = APIRouter(prefix="/commissions", tags=["Commissions"])


def commission_filters(
    commissioner_id: Optional[uuid.UUID] = Query(default=None, alias="commissionerId"),
    property_id: Optional[uuid.UUID] = Query(default=None, alias="propertyId"),
) -> CommissionSearchFilters:
    return CommissionSearchFilters(
        commissioner_id=commissioner_id, property_id=property_id
    )


@router.post("", status_code=201)
@safe_handler
async def create_commission(
    data: CommissionCreate,
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    commission = await CommissionService(db).create_commission(data)
    return send_success(translate("commission.created", lang), commission, 201)


@router.get("")
@safe_handler
async def search_commissions(
    filters: CommissionSearchFilters = Depends(commission_filters),
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    page = await CommissionService(db).search(filters, params)
    return send_paginated_success(translate("commission.list", lang), page)


@router.get("/{commission_id}")
@safe_handler
async def get_commission(
    commission_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    commission = await CommissionService(db).get_commission(commission_id)
    return send_success(translate("commission.retrieved", lang), commission)
