# (c) Nelen & Schuurmans

from typing import ClassVar
from typing import Literal

from fastapi import Query

from bookshelf.base.domain import ComparisonFilter
from bookshelf.base.domain import Filter
from bookshelf.base.domain import QueryOptions
from bookshelf.base.domain import ValueObject

__all__ = ["RequestQuery"]


class RequestQuery(ValueObject):
    """This class standardizes filtering, sorting and pagination for list endpoints.

    Subclass it to add filter fields; ``<field>__<operator>`` names (e.g.
    ``id__gt``) become comparison filters. Example usage in a Resource:

        @get("/books/search")
        async def search(self, q: Annotated[BookSearchQuery, Query()]):
            return await self.manager.query_books().where(*q.filters()).all()
    """

    SEPARATOR: ClassVar[str] = "__"
    NON_FILTERS: ClassVar[frozenset[str]] = frozenset({"limit", "offset", "order_by"})

    limit: int = Query(50, ge=1, le=100, description="Page size limit")
    offset: int = Query(0, ge=0, description="Page offset")
    order_by: Literal["id", "-id"] = Query(
        default="id", description="Field to order by"
    )

    def as_query_options(self) -> QueryOptions:
        if self.order_by.startswith("-"):
            order_by = self.order_by[1:]
            ascending = False
        else:
            order_by = self.order_by
            ascending = True
        return QueryOptions(
            limit=self.limit, offset=self.offset, order_by=order_by, ascending=ascending
        )

    def _regular_filter(self, name, value) -> Filter:
        # deal with list query paramerers
        if not isinstance(value, list):
            value = [value]
        return Filter(field=name, values=value)

    def _comparison_filter(self, name, value) -> ComparisonFilter:
        field, operator = name.rsplit(self.SEPARATOR, 1)
        return ComparisonFilter(
            field=field,
            values=[value],
            operator=operator,
        )

    def filters(self) -> list[Filter]:
        result: list[Filter] = []
        for name in self.model_fields:
            if name in self.NON_FILTERS:
                continue
            value = getattr(self, name)
            if value is None:
                continue
            if self.SEPARATOR in name:
                result.append(self._comparison_filter(name, value))
            else:
                result.append(self._regular_filter(name, value))
        return result
