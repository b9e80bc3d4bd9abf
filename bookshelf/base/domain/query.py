# (c) Nelen & Schuurmans

from typing import Generic
from typing import TYPE_CHECKING
from typing import TypeVar

from .filter import Filter
from .pagination import QueryOptions

if TYPE_CHECKING:
    from .repository import Repository

__all__ = ["Query"]


T = TypeVar("T")


class Query(Generic[T]):
    """A composable, lazily evaluated query over the entities of a repository.

    Every composition method returns a new Query; nothing touches storage until
    one of the awaitable methods (``all``, ``first``, ``count``) is called.
    Filtering, sorting and slicing are pushed down to the gateway in a single
    select. ``include`` names one relation that the gateway loads eagerly.

    Example:

        >>> query = repo.query("author").where(Filter(field="title", values=["C#"]))
        >>> books = await query.order_by("id", ascending=False).slice(10).all()
    """

    def __init__(
        self,
        repo: "Repository[T]",
        include: str | None = None,
        filters: tuple[Filter, ...] = (),
        params: QueryOptions | None = None,
    ):
        self.repo = repo
        self.include = include
        self.filters = filters
        self.params = params

    def _replace(self, **kwargs) -> "Query[T]":
        values = {
            "include": self.include,
            "filters": self.filters,
            "params": self.params,
            **kwargs,
        }
        return self.__class__(self.repo, **values)

    def _options(self) -> QueryOptions:
        return self.params or QueryOptions()

    def where(self, *filters: Filter) -> "Query[T]":
        return self._replace(filters=self.filters + filters)

    def order_by(self, field: str, ascending: bool = True) -> "Query[T]":
        params = self._options().model_copy(
            update={"order_by": field, "ascending": ascending}
        )
        return self._replace(params=params)

    def slice(self, limit: int | None, offset: int = 0) -> "Query[T]":
        params = QueryOptions(
            limit=limit,
            offset=offset,
            order_by=self._options().order_by,
            ascending=self._options().ascending,
        )
        return self._replace(params=params)

    async def all(self) -> list[T]:
        records = await self.repo.gateway.filter(
            list(self.filters), params=self.params, include=self.include
        )
        return [self.repo.entity(**x) for x in records]

    async def first(self) -> T | None:
        offset = self.params.offset if self.params else 0
        result = await self.slice(1, offset).all()
        return result[0] if result else None

    async def count(self) -> int:
        return await self.repo.gateway.count(list(self.filters))
