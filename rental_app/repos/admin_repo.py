from sqlalchemy import func, select

from models.enums import RequestStatus
from models.models import Commission, Property, RentalRequest, User


class AdminRepo:
    def __init__(self, db):
        self.db = db

    async def _count(self, model, *criteria) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        return (await self.db.scalar(query)) or 0

    async def _sum(self, column) -> int:
        return int((await self.db.scalar(select(func.coalesce(func.sum(column), 0)))) or 0)

    async def collect_stats(self) -> dict:
        return {
            "total_users": await self._count(User),
            "total_properties": await self._count(Property),
            "total_requests": await self._count(RentalRequest),
            "total_commissions": await self._count(Commission),
            "pending_users": await self._count(User, User.verified.is_(False)),
            "pending_properties": await self._count(
                Property, Property.verified.is_(False)
            ),
            "pending_requests": await self._count(
                RentalRequest, RentalRequest.status == RequestStatus.PENDING
            ),
            "total_commission_amount": await self._sum(Commission.amount),
            "total_platform_fee": await self._sum(Commission.platform_fee),
        }
