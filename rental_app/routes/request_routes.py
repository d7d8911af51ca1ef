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
from models.enums import RequestStatus
from schemas.schema import RequestCreate, RequestSearchFilters
from security.security_generate import Identity
from services.request_service import RequestService

router = APIRouter(prefix="/requests", tags=["Rental Requests"])


def request_filters(
    status: Optional[RequestStatus] = Query(default=None),
    tenant_id: Optional[uuid.UUID] = Query(default=None, alias="tenantId"),
    property_id: Optional[uuid.UUID] = Query(default=None, alias="propertyId"),
) -> RequestSearchFilters:
    return RequestSearchFilters(
        status=status, tenant_id=tenant_id, property_id=property_id
    )


@router.post("", status_code=201)
@safe_handler
async def create_request(
    data: RequestCreate,
    db: AsyncSession = Depends(get_db_async),
    identity: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    result = await RequestService(db).create_request(data=data, identity=identity)
    return send_success(translate("request.created", lang), result, 201)


@router.get("")
@safe_handler
async def search_requests(
    filters: RequestSearchFilters = Depends(request_filters),
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    page = await RequestService(db).search(filters, params)
    return send_paginated_success(translate("request.list", lang), page)


@router.get("/{request_id}")
@safe_handler
async def get_request(
    request_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    result = await RequestService(db).get_request(request_id)
    return send_success(translate("request.retrieved", lang), result)


@router.patch("/{request_id}/connect")
@safe_handler
async def connect_request(
    request_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    identity: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    result = await RequestService(db).connect(
        request_id=request_id, admin_id=identity.user_id
    )
    return send_success(translate("request.connected", lang), result)


@router.patch("/{request_id}/complete")
@safe_handler
async def complete_request(
    request_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    result = await RequestService(db).complete(request_id)
    return send_success(translate("request.completed", lang), result)
