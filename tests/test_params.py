from typing import Any, Optional

from pydantic import BaseModel

from swagger_gen.generator.fields import Float32, Int8, UInt32
from swagger_gen.generator.params import classify_parameters
from swagger_gen.generator.paths import RoutePattern
from sample_service import SampleReq, tag


class Nested(BaseModel):
    a: str = tag("a")


class Filters(BaseModel):
    ids: list[int] = tag("ids", default=[])
    names: list[Optional[str]] = tag("names", default=[])
    limit: Optional[int] = tag("limit,omitempty")
    ratio: float = tag("ratio")
    small: Float32 = tag("small")
    flag: bool = tag("flag")
    byte: Int8 = tag("byte")
    count: UInt32 = tag("count")


class Unsupported(BaseModel):
    nested: Nested = tag("nested")
    anything: Any = tag("anything")
    mapping: dict[str, str] = tag("mapping", default={})
    matrix: list[list[int]] = tag("matrix", default=[])
    keep: str = tag("keep")


def _dump(params):
    return [p.model_dump(by_alias=True, exclude_none=True) for p in params]


class TestClassifyParameters:
    def test_path_and_query(self):
        params = classify_parameters(RoutePattern.parse("/some/:x/:y"), SampleReq, "json")
        assert _dump(params) == [
            {"name": "x", "in": "path", "required": True, "type": "string"},
            {"name": "y", "in": "path", "required": True, "type": "string"},
            {
                "name": "z",
                "in": "query",
                "required": True,
                "allowEmptyValue": False,
                "type": "integer",
                "format": "int64",
            },
        ]

    def test_field_in_pattern_is_never_query(self):
        params = classify_parameters(RoutePattern.parse("/some/:z"), SampleReq, "json")
        by_name = {p.name: p for p in params}
        assert by_name["z"].location == "path"
        assert by_name["x"].location == "query"

    def test_query_params_always_required(self):
        params = classify_parameters(RoutePattern.parse("/filters"), Filters, "json")
        assert all(p.required for p in params)
        assert all(p.allow_empty_value is False for p in params)

    def test_unmatched_path_param_not_emitted(self):
        params = classify_parameters(RoutePattern.parse("/items/:id"), SampleReq, "json")
        assert "id" not in {p.name for p in params}
        assert all(p.location == "query" for p in params)

    def test_wire_types(self):
        params = classify_parameters(RoutePattern.parse("/filters"), Filters, "json")
        types = {p.name: (p.type, p.format) for p in params}
        assert types["limit"] == ("integer", "int64")
        assert types["ratio"] == ("number", "double")
        assert types["small"] == ("number", "float")
        assert types["flag"] == ("boolean", None)
        assert types["byte"] == ("integer", "int8")
        assert types["count"] == ("integer", "int32")

    def test_collections_are_arrays(self):
        params = classify_parameters(RoutePattern.parse("/filters"), Filters, "json")
        by_name = {p.name: p for p in params}
        ids = by_name["ids"].model_dump(by_alias=True, exclude_none=True)
        assert ids["type"] == "array"
        assert ids["items"] == {"type": "integer", "format": "int64"}
        assert ids["collectionFormat"] == "multi"
        assert by_name["names"].items.type == "string"

    def test_array_path_param_uses_csv(self):
        params = classify_parameters(RoutePattern.parse("/filters/:ids"), Filters, "json")
        ids = [p for p in params if p.name == "ids"][0]
        assert ids.location == "path"
        assert ids.collection_format == "csv"

    def test_unsupported_kinds_dropped(self):
        params = classify_parameters(RoutePattern.parse("/x"), Unsupported, "json")
        assert [p.name for p in params] == ["keep"]

    def test_untagged_namespace_yields_nothing(self):
        assert classify_parameters(RoutePattern.parse("/some/:x/:y"), SampleReq, "xml") == []
