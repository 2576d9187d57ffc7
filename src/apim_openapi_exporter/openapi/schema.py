"""Maps abstract parameter types to OpenAPI schema fragments."""

from apim_openapi_exporter.openapi.models import Schema

_ENUM_PREFIX = "PARAMETER_TYPE_"


def normalize_type(param_type: str | None) -> str:
    """Lower-case a type name, dropping the protobuf enum prefix."""
    name = (param_type or "").strip().upper()
    if name.startswith(_ENUM_PREFIX):
        name = name[len(_ENUM_PREFIX):]
    return name.lower()


def parameter_schema(param_type: str | None) -> Schema:
    """Return the schema for a parameter type. Unknown types are strings."""
    name = normalize_type(param_type)
    if name == "integer":
        return Schema(type="integer")
    if name == "uuid":
        return Schema(type="string", format="uuid")
    return Schema(type="string")
