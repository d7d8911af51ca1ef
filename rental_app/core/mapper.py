from typing import Iterable, Type, TypeVar

from pydantic import BaseModel

from .paginate import Page

T = TypeVar("T", bound=BaseModel)


class ORMMapper:
    @staticmethod
    def one(item, schema: Type[T]) -> T:
        return schema.model_validate(item)

    @staticmethod
    def many(items: Iterable, schema: Type[T]) -> list[T]:
        return [schema.model_validate(item) for item in items]

    @classmethod
    def page(cls, page: Page, schema: Type[T]) -> Page[T]:
        return Page(
            items=cls.many(page.items, schema),
            total_items=page.total_items,
            page=page.page,
            page_size=page.page_size,
        )
