"""Service descriptions shared by the generator and CLI tests."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from swagger_gen.desc.base import Contract, RouteSelector, RpcSelector, ServiceDescriptor


def tag(name: str, default: Any = None):
    return Field(default=default, json_schema_extra={"json": name})


class SampleReq(BaseModel):
    x: str = tag("x")
    y: str = tag("y")
    z: int = tag("z")


class SubRes(BaseModel):
    some: str = tag("some")
    another: bytes = tag("another")


class SampleRes(BaseModel):
    out1: int = tag("out1")
    out2: str = tag("out2,omitempty")
    sub: SubRes = tag("sub")
    subs: list[SubRes] = tag("subs", default=[])
    internal: str = ""


@dataclass
class SampleError:
    code: int = field(default=0, metadata={"json": "code"})
    description: str = field(default="", metadata={"json": "description"})


class AnotherRes(BaseModel):
    out1: int = tag("out1")
    out2: str = tag("out2")


class TestService:
    __test__ = False

    def desc(self) -> ServiceDescriptor:
        return (
            ServiceDescriptor(name="testService")
            .add_contract(
                Contract()
                .set_name("getSome")
                .add_selector(RouteSelector(method="GET", path="/some/:x/:y"))
                .add_selector(RpcSelector(predicate="getSome"))
                .set_input(SampleReq)
                .set_output(SampleRes)
                .add_possible_error(404, "ITEM1", SampleError)
                .add_possible_error(404, "ITEM2", SampleError())
            )
            .add_contract(
                Contract()
                .set_name("postSome")
                .add_selector(RouteSelector(method="POST", path="/some/:x/:y"))
                .set_input(SampleReq())
                .set_output(AnotherRes)
                .add_possible_error(504, "SERVER", SampleError)
            )
        )


def services() -> list[ServiceDescriptor]:
    return [TestService().desc()]


default_service = TestService()

not_a_service = 42


def service_stream():
    return (s for s in services())
