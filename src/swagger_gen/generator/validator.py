"""Structural checks for generated Swagger documents.

Each check returns ``{location: message}`` for the problems it finds.
"""

import re
from pathlib import Path

import yaml

from swagger_gen.errors import SwaggerGenError
from swagger_gen.spec.models import DEFINITIONS_PREFIX

OPERATION_KEYS = ("get", "put", "post", "delete", "patch", "head", "options")
PLACEHOLDER_RE = re.compile(r"\{([^}/]+)\}")


def load_document(file_path: Path) -> dict:
    """Read a JSON or YAML Swagger document."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SwaggerGenError(f"{file_path}: {e}") from e
    if not isinstance(doc, dict) or "swagger" not in doc:
        raise SwaggerGenError(f"{file_path} is not a Swagger 2.0 document")
    return doc


def validate_refs(doc: dict) -> dict[str, str]:
    """Every $ref must point at a registered definition."""
    definitions = doc.get("definitions") or {}
    errors = {}
    for location, ref in _iter_refs(doc, "#"):
        name = ref[len(DEFINITIONS_PREFIX):] if ref.startswith(DEFINITIONS_PREFIX) else None
        if name not in definitions:
            errors[location] = f"dangling $ref {ref}"
    return errors


def validate_path_params(doc: dict) -> dict[str, str]:
    """Every {placeholder} in a path needs a path parameter on each operation."""
    errors = {}
    for path, method, op in _iter_operations(doc):
        declared = {p.get("name") for p in op.get("parameters", []) if p.get("in") == "path"}
        missing = [name for name in PLACEHOLDER_RE.findall(path) if name not in declared]
        if missing:
            errors[f"{method.upper()} {path}"] = f"no parameter for path placeholders: {', '.join(missing)}"
    return errors


def validate_operation_ids(doc: dict) -> dict[str, str]:
    errors = {}
    seen: dict[str, str] = {}
    for path, method, op in _iter_operations(doc):
        op_id = op.get("operationId")
        if not op_id:
            continue
        location = f"{method.upper()} {path}"
        if op_id in seen:
            errors[location] = f"duplicate operationId {op_id!r}, also used by {seen[op_id]}"
        else:
            seen[op_id] = location
    return errors


def validate_document(doc: dict) -> dict[str, str]:
    """Run all checks on a document."""
    errors = {}
    errors.update(validate_refs(doc))
    errors.update(validate_path_params(doc))
    errors.update(validate_operation_ids(doc))
    return errors


def _iter_refs(node, location: str):
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield location, value
            else:
                yield from _iter_refs(value, f"{location}/{_escape(key)}")
    elif isinstance(node, list):
        for i, value in enumerate(node):
            yield from _iter_refs(value, f"{location}/{i}")


def _escape(key) -> str:
    # JSON pointer escaping
    return str(key).replace("~", "~0").replace("/", "~1")


def _iter_operations(doc: dict):
    for path, item in (doc.get("paths") or {}).items():
        if not isinstance(item, dict):
            continue
        for method in OPERATION_KEYS:
            op = item.get(method)
            if isinstance(op, dict):
                yield path, method, op
