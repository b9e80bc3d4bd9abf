# (c) Nelen & Schuurmans

from typing import ClassVar
from typing import TypeVar

from .exceptions import BadRequest
from .types import Id
from .types import Json
from .value_object import ValueObject

__all__ = ["Entity"]


T = TypeVar("T", bound="Entity")


class Entity(ValueObject):
    """A persisted record with an integer identity assigned by storage.

    Fields listed in ``relations`` hold eagerly loaded related entities. They
    are never written to storage.
    """

    relations: ClassVar[frozenset[str]] = frozenset()

    id: Id | None = None

    def update(self: T, **values) -> T:
        if "id" in values and self.id is not None and values["id"] != self.id:
            raise BadRequest("Cannot change the id of an entity")
        return super().update(**values)

    def to_record(self) -> Json:
        return self.model_dump(exclude=set(self.relations))

    def __hash__(self):
        assert self.id is not None
        return hash(self.__class__) + hash(self.id)
