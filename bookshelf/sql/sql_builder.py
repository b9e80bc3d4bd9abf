# (c) Nelen & Schuurmans

import operator

from sqlalchemy import and_
from sqlalchemy import asc
from sqlalchemy import Column
from sqlalchemy import delete
from sqlalchemy import desc
from sqlalchemy import Executable
from sqlalchemy import func
from sqlalchemy import insert
from sqlalchemy import select
from sqlalchemy import Table
from sqlalchemy import text
from sqlalchemy import true
from sqlalchemy import update
from sqlalchemy.sql.expression import ColumnElement
from sqlalchemy.sql.expression import false

from bookshelf.base.domain import BadRequest
from bookshelf.base.domain import ComparisonFilter
from bookshelf.base.domain import Filter
from bookshelf.base.domain import Id
from bookshelf.base.domain import Json
from bookshelf.base.domain import QueryOptions

__all__ = ["SQLBuilder"]


OPERATORS = {
    "lt": operator.lt,
    "le": operator.le,
    "ge": operator.ge,
    "gt": operator.gt,
    "eq": operator.eq,
    "ne": operator.ne,
}


class SQLBuilder:
    def __init__(self, table: Table):
        self.table = table

    def _column(self, name: str) -> Column | None:
        return getattr(self.table.c, name, None)

    def _filter_to_sql(self, filter: Filter) -> ColumnElement:
        column = self._column(filter.field)
        if column is None:
            return false()
        if isinstance(filter, ComparisonFilter):
            return OPERATORS[filter.operator.value](column, filter.values[0])
        if len(filter.values) == 0:
            return false()
        elif len(filter.values) == 1:
            return column == filter.values[0]
        else:
            return column.in_(filter.values)

    def _filters_to_sql(self, filters: list[Filter]) -> ColumnElement:
        return and_(*[self._filter_to_sql(x) for x in filters])

    def _where(self, query, filters: list[Filter]):
        if not filters:
            return query
        return query.where(self._filters_to_sql(filters))

    def _id_filter_to_sql(self, id: Id) -> ColumnElement:
        return self._filters_to_sql([Filter.for_id(id)])

    def _sanitize_item(self, item: Json) -> Json:
        known = {c.key for c in self.table.c}
        result = {k: item[k] for k in item.keys() if k in known}
        if "id" in result and result["id"] is None:
            del result["id"]
        return result

    def select(self, filters: list[Filter], params: QueryOptions | None = None):
        query = self._where(select(self.table), filters)
        if params is None:
            return query
        column = self._column(params.order_by)
        if column is None:
            raise BadRequest(f"cannot order by '{params.order_by}'")
        query = query.order_by(asc(column) if params.ascending else desc(column))
        if params.limit is not None:
            query = query.limit(params.limit).offset(params.offset)
        elif params.offset:
            query = query.offset(params.offset)
        return query

    def insert(self, item: Json) -> Executable:
        return (
            insert(self.table).values(**self._sanitize_item(item)).returning(self.table)
        )

    def update(self, id: Id, item: Json) -> Executable:
        return (
            update(self.table)
            .where(self._id_filter_to_sql(id))
            .values(**self._sanitize_item(item))
            .returning(self.table)
        )

    def delete(self, id: Id) -> Executable:
        return (
            delete(self.table)
            .where(self._id_filter_to_sql(id))
            .returning(self.table.c.id)
        )

    def count(self, filters: list[Filter]) -> Executable:
        return self._where(
            select(func.count().label("count")).select_from(self.table), filters
        )

    def exists(self, filters: list[Filter]) -> Executable:
        query = select(true().label("exists")).select_from(self.table)
        return self._where(query, filters).limit(1)

    def lock(self, mode: str = "SHARE ROW EXCLUSIVE") -> Executable:
        return text(f'LOCK TABLE "{self.table.name}" IN {mode} MODE')
