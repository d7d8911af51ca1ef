from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import require_admin
from core.get_db import get_db_async
from core.localization import Language, get_language, translate
from core.response import send_success
from core.safe_handler import safe_handler
from security.security_generate import Identity
from services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats")
@safe_handler
async def get_stats(
    db: AsyncSession = Depends(get_db_async),
    _: Identity = Depends(require_admin),
    lang: Language = Depends(get_language),
):
    result = await AdminService(db).get_stats()
    return send_success(translate("admin.stats", lang), result)
