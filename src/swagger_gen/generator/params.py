"""Parameter classifier: decides path vs. query for each input field."""

import logging

from swagger_gen.generator.fields import Kind, Shape, describe_fields
from swagger_gen.generator.paths import RoutePattern
from swagger_gen.spec.models import Items, Parameter, path_param, query_param

logger = logging.getLogger(__name__)

PARAM_TYPES: dict[Kind, tuple[str, str | None]] = {
    Kind.STRING: ("string", None),
    Kind.BOOL: ("boolean", None),
    Kind.INT8: ("integer", "int8"),
    Kind.UINT8: ("integer", "int8"),
    Kind.INT32: ("integer", "int32"),
    Kind.UINT32: ("integer", "int32"),
    Kind.INT64: ("integer", "int64"),
    Kind.UINT64: ("integer", "int64"),
    Kind.FLOAT32: ("number", "float"),
    Kind.FLOAT64: ("number", "double"),
}


def classify_parameters(pattern: RoutePattern, record_type: type, tag_name: str) -> list[Parameter]:
    """Build one required parameter per tagged field of ``record_type``.

    Fields named like a parameter segment of ``pattern`` go in the path,
    all others in the query string. Fields whose type cannot travel as a
    parameter are dropped.
    """
    path_params = set(pattern.params)
    params = []
    for field in describe_fields(record_type, tag_name):
        if field.name in path_params:
            param = path_param(field.name)
        else:
            param = query_param(field.name)
        if set_parameter_type(param, field.shape) is None:
            logger.debug(
                "dropping parameter %r of %s: unsupported kind %s",
                field.name, record_type.__name__, field.shape.type_name,
            )
            continue
        params.append(param)
    return params


def set_parameter_type(param: Parameter, shape: Shape) -> Parameter | None:
    """Type ``param`` after ``shape``; returns None when it has no parameter form."""
    if shape.kind is Kind.OPTIONAL:
        shape = shape.elem

    if shape.kind is Kind.COLLECTION:
        elem = shape.elem
        if elem.kind is Kind.OPTIONAL:
            elem = elem.elem
        if elem.kind not in PARAM_TYPES:
            return None
        type_, format_ = PARAM_TYPES[elem.kind]
        param.typed("array")
        param.items = Items(type=type_, format=format_)
        param.collection_format = "multi" if param.location == "query" else "csv"
        return param

    if shape.kind not in PARAM_TYPES:
        return None
    return param.typed(*PARAM_TYPES[shape.kind])
