# (c) Nelen & Schuurmans

import operator
from copy import deepcopy

from bookshelf.base.domain import AlreadyExists
from bookshelf.base.domain import BadRequest
from bookshelf.base.domain import ComparisonFilter
from bookshelf.base.domain import DoesNotExist
from bookshelf.base.domain import Filter
from bookshelf.base.domain import Gateway
from bookshelf.base.domain import Id
from bookshelf.base.domain import Json
from bookshelf.base.domain import QueryOptions

__all__ = ["InMemoryGateway"]


OPERATORS = {
    "lt": operator.lt,
    "le": operator.le,
    "ge": operator.ge,
    "gt": operator.gt,
    "eq": operator.eq,
    "ne": operator.ne,
}


def _matches(item: Json, filter: Filter) -> bool:
    value = item.get(filter.field)
    if isinstance(filter, ComparisonFilter):
        if value is None:
            return False
        return OPERATORS[filter.operator.value](value, filter.values[0])
    return value in filter.values


class InMemoryGateway(Gateway):
    """For testing purposes"""

    def __init__(self, data: list[Json]):
        self.data = {x["id"]: deepcopy(x) for x in data}

    def _get_next_id(self) -> int:
        if len(self.data) == 0:
            return 1
        else:
            return max(self.data) + 1

    def _paginate(self, objs: list[Json], params: QueryOptions) -> list[Json]:
        objs = sorted(
            objs,
            key=lambda x: (x.get(params.order_by) is None, x.get(params.order_by)),
            reverse=not params.ascending,
        )
        if params.limit is None:
            return objs[params.offset :]
        return objs[params.offset : params.offset + params.limit]

    async def filter(
        self,
        filters: list[Filter],
        params: QueryOptions | None = None,
        include: str | None = None,
    ) -> list[Json]:
        if include is not None:
            raise BadRequest(f"cannot include '{include}'")
        result = [
            deepcopy(x)
            for x in self.data.values()
            if all(_matches(x, f) for f in filters)
        ]
        if params is not None:
            result = self._paginate(result, params)
        return result

    async def add(self, item: Json) -> Json:
        item = item.copy()
        id_ = item.pop("id", None)
        # autoincrement (like SQL does)
        if id_ is None:
            id_ = self._get_next_id()
        elif id_ in self.data:
            raise AlreadyExists(id_)

        self.data[id_] = {"id": id_, **item}
        return deepcopy(self.data[id_])

    async def update(self, item: Json) -> Json:
        _id = item.get("id")
        if _id is None or _id not in self.data:
            raise DoesNotExist("item", _id)
        self.data[_id] = deepcopy(item)
        return deepcopy(self.data[_id])

    async def remove(self, id: Id) -> bool:
        if id not in self.data:
            return False
        del self.data[id]
        return True
