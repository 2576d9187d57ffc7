import pytest

from apim_openapi_exporter.openapi.schema import normalize_type, parameter_schema


class TestParameterSchema:
    @pytest.mark.parametrize("name", ["integer", "INTEGER", "PARAMETER_TYPE_INTEGER"])
    def test_integer(self, name):
        assert parameter_schema(name).model_dump() == {"type": "integer"}

    @pytest.mark.parametrize("name", ["uuid", "UUID", "PARAMETER_TYPE_UUID"])
    def test_uuid(self, name):
        assert parameter_schema(name).model_dump() == {"type": "string", "format": "uuid"}

    @pytest.mark.parametrize("name", ["", None, "string", "PARAMETER_TYPE_UNSPECIFIED", "boolean"])
    def test_everything_else_is_string(self, name):
        schema = parameter_schema(name)
        assert schema.type == "string"
        assert schema.format is None


class TestNormalizeType:
    def test_strips_enum_prefix(self):
        assert normalize_type("PARAMETER_TYPE_UUID") == "uuid"

    def test_strips_whitespace(self):
        assert normalize_type("  Integer ") == "integer"
