"""Data models for the route graph.

The graph-construction service describes an API as path segments (nodes),
parent/child edges and operations attached to segments. Graphs arrive either
in a plain form or as the protobuf JSON mapping of the upstream messages
(camelCase names, ``{"static": {...}}`` / ``{"param": {...}}`` oneof
wrappers); both validate into the same models.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class GraphModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class StaticSegment(GraphModel):
    """A literal path component such as ``users``."""

    kind: Literal["static"] = "static"
    id: str
    name: str


class ParamSegment(GraphModel):
    """A path variable, rendered as ``{name}`` in the URL."""

    kind: Literal["param"] = "param"
    id: str
    name: str
    type: str = ""  # integer / uuid / PARAMETER_TYPE_*; anything else is a string
    example: str = ""

    @field_validator("type", "example", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


Segment = Annotated[StaticSegment | ParamSegment, Field(discriminator="kind")]


class Edge(GraphModel):
    """Parent -> child nesting between two segment ids."""

    source: str = Field(alias="from")
    target: str = Field(alias="to")


class QueryParameter(GraphModel):
    name: str
    type: str = ""
    example: str = ""

    @field_validator("type", "example", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class Operation(GraphModel):
    """An HTTP method attached to one segment."""

    id: str
    path_segment_id: str
    method: str  # GET / POST / PUT / DELETE / PATCH, any case
    query_parameters: list[QueryParameter] = []
    status_codes: list[int] = []


class ApiGraph(GraphModel):
    segments: list[Segment] = []
    edges: list[Edge] = []
    operations: list[Operation] = []

    @field_validator("segments", mode="before")
    @classmethod
    def _unwrap_segments(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [_unwrap_segment(item) for item in value]


def _unwrap_segment(item: Any) -> Any:
    """Normalize a raw segment dict so the ``kind`` discriminator is present."""
    if not isinstance(item, dict) or "kind" in item:
        return item
    for kind in ("static", "param"):
        if isinstance(item.get(kind), dict):
            return {**item[kind], "kind": kind}
    # Plain form without an explicit kind: only variables carry type/example.
    kind = "param" if "type" in item or "example" in item else "static"
    return {**item, "kind": kind}
