"""Route path patterns.

Routes mark path parameters with a leading colon (``/users/:id``); Swagger
expects braces (``/users/{id}``).
"""

from typing import NamedTuple

PARAM_PREFIX = ":"


class Segment(NamedTuple):
    text: str
    is_param: bool


class RoutePattern:
    """A path pattern parsed once into literal and parameter segments."""

    def __init__(self, segments: list[Segment]):
        self.segments = segments

    @classmethod
    def parse(cls, path: str) -> "RoutePattern":
        segments = []
        for part in path.split("/"):
            if part.startswith(PARAM_PREFIX):
                segments.append(Segment(part[len(PARAM_PREFIX):], True))
            else:
                segments.append(Segment(part, False))
        return cls(segments)

    @property
    def params(self) -> list[str]:
        return [s.text for s in self.segments if s.is_param]

    def to_swagger(self) -> str:
        return "/".join("{" + s.text + "}" if s.is_param else s.text for s in self.segments)

    def __repr__(self) -> str:
        return f"RoutePattern({self.to_swagger()!r})"


def replace_path(path: str) -> str:
    """Rewrite ``/some/:x/:y`` as ``/some/{x}/{y}``."""
    return RoutePattern.parse(path).to_swagger()
