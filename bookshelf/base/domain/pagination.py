# (c) Nelen & Schuurmans

from pydantic import BaseModel
from pydantic import Field

__all__ = ["QueryOptions"]


class QueryOptions(BaseModel):
    limit: int | None = Field(default=None, ge=0)
    offset: int = Field(default=0, ge=0)
    order_by: str = "id"
    ascending: bool = True
