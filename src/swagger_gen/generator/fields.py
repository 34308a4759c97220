"""Field introspection for record types.

A record type is a pydantic model or a dataclass. Its fields are exposed
under the names found in a tag namespace (``json`` by default):

    class User(BaseModel):
        id: Int32 = Field(json_schema_extra={"json": "id"})

    @dataclass
    class Address:
        city: str = field(metadata={"json": "city,omitempty"})

Fields without a tag in the namespace are not exposed.
"""

import collections.abc
import dataclasses
import logging
import sys
import types
import typing
from enum import Enum
from typing import Annotated, Any, Iterable, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Kind(str, Enum):
    STRING = "string"
    BOOL = "bool"
    INT8 = "int8"
    UINT8 = "uint8"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    RECORD = "record"
    ANY = "any"
    OPTIONAL = "optional"
    COLLECTION = "collection"
    UNSUPPORTED = "unsupported"


# Explicit widths. Plain int and float are 64 bit.
Int8 = Annotated[int, Kind.INT8]
UInt8 = Annotated[int, Kind.UINT8]
Int32 = Annotated[int, Kind.INT32]
UInt32 = Annotated[int, Kind.UINT32]
Int64 = Annotated[int, Kind.INT64]
UInt64 = Annotated[int, Kind.UINT64]
Float32 = Annotated[float, Kind.FLOAT32]
Float64 = Annotated[float, Kind.FLOAT64]

_COLLECTION_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)


class Shape(BaseModel):
    """How a value of some annotation is laid out on the wire."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: Kind
    type_name: str
    record: type | None = None  # set for Kind.RECORD
    elem: "Shape | None" = None  # set for Kind.OPTIONAL and Kind.COLLECTION


class FieldDescriptor(BaseModel):
    name: str  # exposed name, tag modifiers stripped
    attribute: str  # python attribute name
    shape: Shape


def is_record(tp: Any) -> bool:
    return isinstance(tp, type) and (issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp))


def record_type_of(handle: Any) -> type:
    """Accept a record class or an instance of one."""
    return handle if isinstance(handle, type) else type(handle)


def resolve_shape(annotation: Any, metadata: Iterable[Any] = ()) -> Shape:
    for extra in metadata:
        if isinstance(extra, Kind):
            return Shape(kind=extra, type_name=extra.value)

    origin = typing.get_origin(annotation)
    if origin is Annotated:
        base, *extras = typing.get_args(annotation)
        return resolve_shape(base, extras)

    if annotation is Any or annotation is object:
        return Shape(kind=Kind.ANY, type_name="any")

    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            elem = resolve_shape(args[0])
            return Shape(kind=Kind.OPTIONAL, type_name=elem.type_name, elem=elem)
        return Shape(kind=Kind.UNSUPPORTED, type_name="union")

    if origin in _COLLECTION_ORIGINS or annotation in (list, tuple, set, frozenset):
        args = [a for a in typing.get_args(annotation) if a is not Ellipsis]
        elem = resolve_shape(args[0]) if args else Shape(kind=Kind.ANY, type_name="any")
        return Shape(kind=Kind.COLLECTION, type_name=elem.type_name, elem=elem)

    if origin is not None:
        return Shape(kind=Kind.UNSUPPORTED, type_name=_display_name(origin))

    if not isinstance(annotation, type):
        return Shape(kind=Kind.UNSUPPORTED, type_name=_display_name(annotation))

    # bool is an int subclass, so it is checked first
    if issubclass(annotation, bool):
        return Shape(kind=Kind.BOOL, type_name="bool")
    if is_record(annotation):
        return Shape(kind=Kind.RECORD, type_name=annotation.__name__, record=annotation)
    if issubclass(annotation, str):
        return Shape(kind=Kind.STRING, type_name="str")
    if issubclass(annotation, (bytes, bytearray)):
        return Shape(kind=Kind.UINT8, type_name="bytes")
    if issubclass(annotation, int):
        return Shape(kind=Kind.INT64, type_name="int")
    if issubclass(annotation, float):
        return Shape(kind=Kind.FLOAT64, type_name="float")
    return Shape(kind=Kind.UNSUPPORTED, type_name=annotation.__name__)


def describe_fields(record_type: type, tag_name: str) -> list[FieldDescriptor]:
    """Return the tagged fields of ``record_type`` in declaration order."""
    fields = []
    for attribute, tag, annotation, metadata in _tagged_fields(record_type, tag_name):
        name = tag.split(",")[0].strip()
        if not name:
            continue
        fields.append(
            FieldDescriptor(name=name, attribute=attribute, shape=resolve_shape(annotation, metadata))
        )
    return fields


def _tagged_fields(record_type: type, tag_name: str):
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        for attribute, info in record_type.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            tag = extra.get(tag_name)
            if isinstance(tag, str) and tag:
                yield attribute, tag, info.annotation, info.metadata
    elif dataclasses.is_dataclass(record_type):
        hints = _dataclass_hints(record_type)
        for f in dataclasses.fields(record_type):
            tag = f.metadata.get(tag_name)
            if isinstance(tag, str) and tag:
                yield f.name, tag, hints.get(f.name, f.type), ()


def _dataclass_hints(record_type: type) -> dict[str, Any]:
    """Resolve annotations, field by field when some cannot be resolved.

    Names imported only under TYPE_CHECKING stay as their source string,
    which resolves to an unsupported shape.
    """
    try:
        return typing.get_type_hints(record_type, include_extras=True)
    except NameError:
        pass

    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module else {}
    localns = {record_type.__name__: record_type}
    hints = {}
    for f in dataclasses.fields(record_type):
        annotation = f.type
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)
            except NameError:
                logger.debug("cannot resolve %s.%s: %r", record_type.__name__, f.name, annotation)
        hints[f.name] = annotation
    return hints


def _display_name(obj: Any) -> str:
    if isinstance(obj, str):
        return obj
    return getattr(obj, "__name__", None) or getattr(obj, "_name", None) or repr(obj)
