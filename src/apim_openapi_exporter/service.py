"""BuildOpenAPISpec: the exporter's single request/response operation."""

from pydantic import Field

from apim_openapi_exporter.graph.base import ApiGraph, GraphModel
from apim_openapi_exporter.openapi.document import build_document, serialize_document
from apim_openapi_exporter.openapi.traversal import ConflictPolicy


class BuildOpenAPISpecRequest(GraphModel):
    api_graph: ApiGraph = Field(default_factory=ApiGraph)


class BuildOpenAPISpecResponse(GraphModel):
    spec_json: str


def build_openapi_spec(
    request: BuildOpenAPISpecRequest,
    on_conflict: ConflictPolicy = "overwrite",
) -> BuildOpenAPISpecResponse:
    """Generate the OpenAPI document for ``request.api_graph`` as compact JSON.

    Raises MalformedGraphError or SerializationError; no partial document is
    returned on failure.
    """
    document = build_document(request.api_graph, on_conflict=on_conflict)
    return BuildOpenAPISpecResponse(spec_json=serialize_document(document))
