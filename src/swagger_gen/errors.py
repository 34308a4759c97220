"""Exceptions raised while generating a Swagger document.

Only the terminal encode/write step and strict cycle detection can fail a
run; everything else degrades with a logged notice.
"""


class SwaggerGenError(Exception):
    """Base class for all swagger-gen failures."""


class DestinationError(SwaggerGenError):
    """The output file or stream could not be opened or written."""


class SerializationError(SwaggerGenError):
    """The assembled document could not be encoded."""


class CyclicTypeError(SwaggerGenError):
    """A record type references itself, directly or through other types."""

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__(f"cyclic type reference: {' -> '.join(chain)}")


class ServiceLoadError(SwaggerGenError):
    """A service target could not be imported or resolved."""
