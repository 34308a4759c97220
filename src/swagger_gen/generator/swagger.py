"""Swagger document assembler.

    sg = SwaggerGenerator("Users API", "v1.0.0").with_tag("json")
    sg.write_to_file("swagger.json", users_service, billing_service)
"""

import io
import logging
from pathlib import Path
from typing import IO

import yaml
from pydantic_core import PydanticSerializationError

from swagger_gen.desc.base import ServiceDescriptor
from swagger_gen.errors import DestinationError, SerializationError
from swagger_gen.generator.definitions import DefinitionBuilder
from swagger_gen.generator.operations import OperationBuilder
from swagger_gen.spec.models import Info, Swagger, Tag

logger = logging.getLogger(__name__)

FORMATS = ("json", "yaml")


class SwaggerGenerator:
    """Builds OpenAPI 2.0 documents from service descriptions.

    The generator only holds configuration; each call builds a fresh
    document, so one generator can serve any number of runs.
    """

    def __init__(
        self,
        title: str,
        version: str,
        description: str = "",
        tag_name: str = "json",
        fail_on_cycle: bool = False,
    ):
        self.title = title
        self.version = version
        self.description = description
        self.tag_name = tag_name
        self.fail_on_cycle = fail_on_cycle

    def with_tag(self, tag_name: str) -> "SwaggerGenerator":
        """Select the field tag namespace that supplies exposed field names."""
        self.tag_name = tag_name
        return self

    def build(self, *services: ServiceDescriptor) -> Swagger:
        doc = Swagger(
            info=Info(title=self.title, version=self.version, description=self.description or None),
        )
        definitions = DefinitionBuilder(doc.definitions, self.tag_name, fail_on_cycle=self.fail_on_cycle)
        operations = OperationBuilder(definitions, self.tag_name)

        for service in services:
            doc.tags.append(Tag(name=service.name))
            for contract in service.contracts:
                operations.add_contract(doc.paths, service.name, contract)

        logger.debug(
            "built document with %d paths and %d definitions",
            len(doc.paths), len(doc.definitions),
        )
        return doc

    def render(self, *services: ServiceDescriptor, fmt: str = "json") -> bytes:
        return encode(self.build(*services), fmt)

    def write_to(self, sink: IO, *services: ServiceDescriptor, fmt: str = "json") -> None:
        """Encode the document and write it to a binary or text stream."""
        data = self.render(*services, fmt=fmt)
        try:
            if _is_text_sink(sink):
                sink.write(data.decode("utf-8"))
            else:
                sink.write(data)
        except (OSError, ValueError, TypeError) as e:
            raise DestinationError(f"cannot write document: {e}") from e

    def write_to_file(self, filename: str | Path, *services: ServiceDescriptor, fmt: str | None = None) -> None:
        """Encode the document, then write it to ``filename``.

        The format defaults to YAML for .yaml/.yml files and JSON otherwise.
        Missing parent directories are created. Nothing is written, and no
        directory created, when encoding fails.
        """
        path = Path(filename)
        data = self.render(*services, fmt=fmt or format_for(path))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise DestinationError(f"cannot write {path}: {e}") from e


def _is_text_sink(sink: IO) -> bool:
    # file wrappers (tempfile, codecs) are not TextIOBase but expose their mode
    return isinstance(sink, io.TextIOBase) or "b" not in getattr(sink, "mode", "b")


def format_for(path: Path) -> str:
    return "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"


def encode(doc: Swagger, fmt: str = "json") -> bytes:
    if fmt not in FORMATS:
        raise ValueError(f"unknown output format {fmt!r}, expected one of {FORMATS}")
    try:
        if fmt == "yaml":
            return yaml.safe_dump(doc.to_dict(), sort_keys=False, allow_unicode=True).encode("utf-8")
        return doc.model_dump_json(by_alias=True, exclude_none=True, indent=2).encode("utf-8")
    except (PydanticSerializationError, yaml.YAMLError) as e:
        raise SerializationError(f"cannot encode document: {e}") from e
