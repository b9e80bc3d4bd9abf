# (c) Nelen & Schuurmans

from typing import Any

__all__ = ["Json", "Id"]


Json = dict[str, Any]
Id = int
