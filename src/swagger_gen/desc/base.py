"""Service descriptions consumed by the Swagger generator.

A service is a named, ordered list of contracts. Each contract binds an
input and an output record type to one or more route selectors and lists
the error payloads it may respond with.
"""

from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


@runtime_checkable
class RestSelector(Protocol):
    """Capability of a selector that is reachable over a REST route."""

    method: str
    path: str


class RouteSelector(BaseModel):
    """Binds a contract to an HTTP method and a path pattern like /users/:id."""

    method: HttpMethod
    path: str


class RpcSelector(BaseModel):
    """Binds a contract to a message predicate. Has no REST route."""

    predicate: str


class PossibleError(BaseModel):
    """An error response a contract may produce."""

    code: int  # HTTP status code
    item: str  # label, e.g. USER_NOT_FOUND
    message: Any  # error payload type or instance


class Contract(BaseModel):
    """A single callable operation of a service."""

    name: str = ""
    input: Any = None
    output: Any = None
    selectors: list[Any] = []
    possible_errors: list[PossibleError] = []

    def set_name(self, name: str) -> "Contract":
        self.name = name
        return self

    def set_input(self, input_type: Any) -> "Contract":
        self.input = input_type
        return self

    def set_output(self, output_type: Any) -> "Contract":
        self.output = output_type
        return self

    def add_selector(self, selector: Any) -> "Contract":
        self.selectors.append(selector)
        return self

    def add_possible_error(self, code: int, item: str, message: Any) -> "Contract":
        self.possible_errors.append(PossibleError(code=code, item=item, message=message))
        return self


class ServiceDescriptor(BaseModel):
    """A named group of contracts. The name becomes the operations' tag."""

    name: str
    contracts: list[Contract] = []

    def add_contract(self, contract: Contract) -> "ServiceDescriptor":
        self.contracts.append(contract)
        return self
