import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_identity, require_admin
from core.get_db import get_db_async
from core.localization import Language, get_language, translate
from core.paginate import PageParams, get_page_params
from core.response import send_paginated_success, send_success
from core.safe_handler import safe_handler
from schemas.schema import UserCreate, UserLoginInput
from security.security_generate import Identity
from services.auth_service import AuthService
from services.property_service import PropertyService
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/register", status_code=201)
@safe_handler
async def register(
    data: UserCreate,
    db: AsyncSession = Depends(get_db_async),
    lang: Language = Depends(get_language),
):
    user = await UserService(db).register(data)
    return send_success(translate("user.registered", lang), user, 201)


@router.post("/login")
@safe_handler
async def login(
    data: UserLoginInput,
    db: AsyncSession = Depends(get_db_async),
    lang: Language = Depends(get_language),
):
    result = await AuthService(db).login(data)
    return send_success(translate("auth.login.success", lang), result)


@router.get("")
@safe_handler
async def list_users(
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    page = await UserService(db).list_all(params)
    return send_paginated_success(translate("user.list", lang), page)


@router.get("/pending/verification")
@safe_handler
async def pending_users(
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    page = await UserService(db).list_pending_verification(params)
    return send_paginated_success(translate("user.pending", lang), page)


@router.get("/{user_id}")
@safe_handler
async def get_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    user = await UserService(db).get_by_id(user_id)
    return send_success(translate("user.retrieved", lang), user)


@router.patch("/{user_id}/verify")
@safe_handler
async def verify_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    user = await UserService(db).verify(user_id)
    return send_success(translate("user.verified", lang), user)


@router.get("/{user_id}/properties")
@safe_handler
async def user_properties(
    user_id: uuid.UUID,
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(get_current_identity),
    lang: Language = Depends(get_language),
):
    page = await PropertyService(db).list_by_owner(user_id, params)
    return send_paginated_success(translate("property.list", lang), page)
