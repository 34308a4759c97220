"""Schema definition builder.

Turns record types into ``#/definitions`` entries, registering nested
record types as it meets them.
"""

import logging

from swagger_gen.errors import CyclicTypeError
from swagger_gen.generator.fields import Kind, Shape, describe_fields, record_type_of
from swagger_gen.spec.models import (
    Schema,
    array_property,
    bool_property,
    float32_property,
    float64_property,
    int8_property,
    int32_property,
    int64_property,
    object_property,
    ref_property,
    string_property,
)

logger = logging.getLogger(__name__)

PRIMITIVES = {
    Kind.STRING: string_property,
    Kind.BOOL: bool_property,
    Kind.INT32: int32_property,
    Kind.UINT32: int32_property,
    Kind.INT64: int64_property,
    Kind.UINT64: int64_property,
    Kind.FLOAT32: float32_property,
    Kind.FLOAT64: float64_property,
}


class DefinitionBuilder:
    """Registers record type definitions into a shared name -> Schema map.

    Definitions are keyed by the type's bare name, the last registration
    wins. Overwriting a name with a different type is logged.
    """

    def __init__(self, definitions: dict[str, Schema], tag_name: str, fail_on_cycle: bool = False):
        self.definitions = definitions
        self.tag_name = tag_name
        self.fail_on_cycle = fail_on_cycle
        self._owners: dict[str, type] = {}
        self._building: list[type] = []

    def add(self, handle) -> str:
        """Register the definition of ``handle`` and return its name."""
        record_type = record_type_of(handle)
        name = record_type.__name__

        if record_type in self._building:
            chain = [t.__name__ for t in self._building[self._building.index(record_type):]] + [name]
            if self.fail_on_cycle:
                raise CyclicTypeError(chain)
            logger.info("cyclic type reference %s, emitting $ref only", " -> ".join(chain))
            return name

        self._building.append(record_type)
        try:
            definition = object_property()
            for field in describe_fields(record_type, self.tag_name):
                definition.set_property(field.name, self.schema_for(field.shape))
        finally:
            self._building.pop()

        owner = self._owners.get(name)
        if owner is not None and owner is not record_type:
            logger.warning(
                "definition %r of %s.%s overwritten by %s.%s",
                name, owner.__module__, owner.__qualname__,
                record_type.__module__, record_type.__qualname__,
            )
        self._owners[name] = record_type
        self.definitions[name] = definition
        return name

    def schema_for(self, shape: Shape) -> Schema:
        if shape.kind is Kind.OPTIONAL:
            return self.schema_for(shape.elem)
        if shape.kind is Kind.COLLECTION:
            return array_property(self.schema_for(shape.elem))
        if shape.kind in PRIMITIVES:
            return PRIMITIVES[shape.kind]()
        if shape.kind in (Kind.INT8, Kind.UINT8):
            # 8-bit values are treated as byte buffers
            return array_property(int8_property())
        if shape.kind is Kind.RECORD:
            return ref_property(self.add(shape.record))
        if shape.kind is Kind.ANY:
            return object_property()

        logger.warning("unsupported field kind %s, falling back to string", shape.type_name)
        return string_property()
