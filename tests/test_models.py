from swagger_gen.spec.models import (
    Info,
    Operation,
    Response,
    Swagger,
    array_property,
    body_param,
    object_property,
    path_param,
    query_param,
    ref_property,
    string_property,
)


class TestSchema:
    def test_ref_alias(self):
        assert ref_property("User").model_dump(by_alias=True, exclude_none=True) == {"$ref": "#/definitions/User"}

    def test_array(self):
        schema = array_property(string_property())
        assert schema.model_dump(by_alias=True, exclude_none=True) == {"type": "array", "items": {"type": "string"}}

    def test_set_property(self):
        schema = object_property().set_property("name", string_property())
        assert schema.properties["name"].type == "string"


class TestParameter:
    def test_path_param(self):
        p = path_param("id").typed("integer", "int64")
        assert p.model_dump(by_alias=True, exclude_none=True) == {
            "name": "id",
            "in": "path",
            "required": True,
            "type": "integer",
            "format": "int64",
        }

    def test_query_param_rejects_empty(self):
        p = query_param("q")
        assert p.model_dump(by_alias=True, exclude_none=True)["allowEmptyValue"] is False

    def test_body_param(self):
        p = body_param("User", ref_property("User"))
        assert p.model_dump(by_alias=True, exclude_none=True)["schema"] == {"$ref": "#/definitions/User"}


class TestOperation:
    def test_responds_with_keys_by_code(self):
        op = Operation(operation_id="x").responds_with(404, Response(description="Items: A"))
        assert op.model_dump(by_alias=True, exclude_none=True)["responses"] == {"404": {"description": "Items: A"}}


class TestSwagger:
    def test_defaults(self):
        doc = Swagger(info=Info(title="T", version="v1")).to_dict()
        assert doc == {
            "swagger": "2.0",
            "info": {"title": "T", "version": "v1"},
            "schemes": ["http", "https"],
            "tags": [],
            "paths": {},
            "definitions": {},
        }
