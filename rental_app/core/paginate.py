import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from fastapi import Query
from sqlalchemy import Select, func, select

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageParams:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @classmethod
    def clamp(cls, page: int | None, page_size: int | None) -> "PageParams":
        page = max(1, page or 1)
        page_size = min(MAX_PAGE_SIZE, max(1, page_size or DEFAULT_PAGE_SIZE))
        return cls(page=page, page_size=page_size)


@dataclass
class Page(Generic[T]):
    items: List[T]
    total_items: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size) if self.page_size else 0

    @property
    def meta(self) -> dict:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
        }


class PaginatePage:
    def page_params(
        self,
        page: int | None = Query(default=None, description="1-based page number"),
        page_size: int | None = Query(
            default=None, alias="pageSize", description="Items per page (max 100)"
        ),
    ) -> PageParams:
        return PageParams.clamp(page, page_size)

    def get_list_json_dumps(self, paginated_props):
        return [p.model_dump(mode="json", by_alias=True) for p in paginated_props]

    def get_single_json_dumps(self, prop_dict):
        return prop_dict.model_dump(mode="json", by_alias=True)

    async def fetch(
        self, db, query: Select, params: PageParams, *options
    ) -> Page:
        total = await db.scalar(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        result = await db.execute(
            query.options(*options).offset(params.offset).limit(params.page_size)
        )
        return Page(
            items=list(result.scalars().unique().all()),
            total_items=total or 0,
            page=params.page,
            page_size=params.page_size,
        )


paginator = PaginatePage()
get_page_params = paginator.page_params
