"""ActionRoute frozen dataclass and the HTTP method enum."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from actionmap.index.protocol import MethodHandle


class HttpMethod(Enum):
    """HTTP methods a route may carry.

    ``SUNBOX`` is the sentinel used for every route derived from a
    Sunbox action class: the framework dispatches by path, not verb.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    SUNBOX = "SUNBOX"


@dataclass(frozen=True, slots=True)
class ActionRoute:
    """A derived route. Built fresh on each scan, never mutated.

    ``source`` is an opaque handle to the method that produced the route.
    """

    method: HttpMethod
    path: str
    source: "MethodHandle"

    @property
    def location(self) -> str:
        """``pkg.Class#method`` for the originating method."""
        owner = self.source.owner
        owner_name = owner.qualified_name or owner.name or "?"
        return f"{owner_name}#{self.source.name}"

    def display(self) -> str:
        return f"{self.method.value} {self.path}"
