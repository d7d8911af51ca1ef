from core.breaker import breaker
from repos.admin_repo import AdminRepo
from schemas.schema import AdminStatsOut


class AdminService:
    def __init__(self, db):
        self.repo: AdminRepo = AdminRepo(db)

    async def get_stats(self) -> AdminStatsOut:
        async def handler():
            return AdminStatsOut(**await self.repo.collect_stats())

        return await breaker.call(handler)
