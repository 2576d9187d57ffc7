"""Models for the generated OpenAPI document.

Field order and omission rules follow the JSON the exporter has always
emitted: empty ``format``, ``example``, ``summary`` and ``parameters`` are
left out, ``responses`` is always present.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer

OPENAPI_VERSION = "3.0.0"
DEFAULT_INFO = {"title": "Generated API", "version": "1.0.0"}
RESPONSE_DESCRIPTION = {"description": "response"}


class _OmitEmpty(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    omit_if_empty: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler) -> dict[str, Any]:
        data = handler(self)
        return {
            k: v for k, v in data.items()
            if k not in self.omit_if_empty or v not in ("", None, [])
        }


class Schema(_OmitEmpty):
    model_config = ConfigDict(frozen=True)

    type: str
    format: str | None = None

    omit_if_empty: ClassVar[frozenset[str]] = frozenset({"format"})


class Parameter(_OmitEmpty):
    """A path or query parameter of one operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str = Field(alias="in")  # path / query
    required: bool
    schema_: Schema = Field(alias="schema")
    example: str = ""

    omit_if_empty: ClassVar[frozenset[str]] = frozenset({"example"})


class OperationEntry(_OmitEmpty):
    summary: str = ""
    parameters: list[Parameter] = []
    responses: dict[str, dict[str, str]] = {}

    omit_if_empty: ClassVar[frozenset[str]] = frozenset({"summary", "parameters"})


class Document(BaseModel):
    openapi: str = OPENAPI_VERSION
    info: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_INFO))
    paths: dict[str, dict[str, OperationEntry]] = {}
