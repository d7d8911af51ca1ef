import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from core.breaker import breaker
from core.exceptions import (
    CommissionerNotFoundError,
    CommissionerNotVerifiedError,
    CommissionNotFoundError,
    PropertyNotFoundError,
    WrongRoleError,
)
from core.mapper import ORMMapper
from core.paginate import Page, PageParams
from core.settings import settings
from models.enums import UserRole
from repos.commission_repo import CommissionRepo
from repos.property_repo import PropertyRepo
from repos.user_repo import UserRepo
from schemas.schema import CommissionCreate, CommissionOut, CommissionSearchFilters

logger = logging.getLogger(__name__)


def compute_platform_fee(amount: int, rate: Optional[Decimal] = None) -> int:
    """Platform share of a commission, rounded half up to a whole unit."""
    rate = settings.PLATFORM_FEE_RATE if rate is None else rate
    fee = (Decimal(amount) * Decimal(rate)).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return int(fee)


class CommissionService:
    def __init__(self, db):
        self.repo: CommissionRepo = CommissionRepo(db)
        self.user_repo: UserRepo = UserRepo(db)
        self.property_repo: PropertyRepo = PropertyRepo(db)
        self.mapper: ORMMapper = ORMMapper()

    async def create_commission(self, data: CommissionCreate) -> CommissionOut:
        async def handler():
            commissioner = await self.user_repo.get_by_id(data.commissioner_id)
            if not commissioner:
                raise CommissionerNotFoundError()
            if commissioner.role != UserRole.COMMISSIONER:
                raise WrongRoleError()
            if not commissioner.verified:
                raise CommissionerNotVerifiedError()

            prop = await self.property_repo.get_by_id(data.property_id)
            if not prop:
                raise PropertyNotFoundError()

            commission = await self.repo.create(
                property_id=prop.id,
                commissioner_id=commissioner.id,
                amount=data.amount,
                platform_fee=compute_platform_fee(data.amount),
            )
            logger.info(
                "Commission %s recorded: amount=%s fee=%s",
                commission.id,
                commission.amount,
                commission.platform_fee,
            )
            return self.mapper.one(commission, CommissionOut)

        return await breaker.call(handler)

    async def get_commission(self, commission_id: uuid.UUID) -> CommissionOut:
        async def handler():
            commission = await self.repo.get_commission_with_relations(commission_id)
            if not commission:
                raise CommissionNotFoundError()
            return self.mapper.one(commission, CommissionOut)

        return await breaker.call(handler)

    async def search(
        self, filters: CommissionSearchFilters, params: PageParams
    ) -> Page[CommissionOut]:
        async def handler():
            page = await self.repo.search(filters, params)
            return self.mapper.page(page, CommissionOut)

        return await breaker.call(handler)

    async def list_all(self, params: PageParams) -> Page[CommissionOut]:
        return await self.search(CommissionSearchFilters(), params)
