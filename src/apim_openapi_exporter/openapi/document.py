"""Assembles and serializes the OpenAPI document."""

import json
from collections.abc import Mapping
from typing import Any

from apim_openapi_exporter.errors import SerializationError
from apim_openapi_exporter.graph.base import ApiGraph
from apim_openapi_exporter.openapi.index import GraphIndex
from apim_openapi_exporter.openapi.models import Document
from apim_openapi_exporter.openapi.traversal import ConflictPolicy, Paths, collect_paths

EXTENSION_PREFIX = "x-"


def assemble_document(paths: Paths) -> Document:
    """Wrap a paths map into the document envelope.

    Paths and methods are sorted so the output does not depend on the order
    in which branches were walked.
    """
    ordered = {
        path: {method: paths[path][method] for method in sorted(paths[path])}
        for path in sorted(paths)
    }
    return Document(paths=ordered)


def build_document(graph: ApiGraph, on_conflict: ConflictPolicy = "overwrite") -> Document:
    """Index the graph, enumerate its paths and assemble the document."""
    index = GraphIndex.build(graph)
    return assemble_document(collect_paths(index, on_conflict=on_conflict))


def document_to_dict(document: Document, extensions: Mapping[str, Any] | None = None) -> dict:
    data = document.model_dump(mode="json", by_alias=True)
    for key, value in (extensions or {}).items():
        if not key.startswith(EXTENSION_PREFIX):
            key = EXTENSION_PREFIX + key
        data[key] = value
    return data


def serialize_document(document: Document, extensions: Mapping[str, Any] | None = None) -> str:
    """Encode the document as compact JSON.

    ``extensions`` are added at the top level as ``x-`` specification
    extensions. Values JSON cannot encode raise SerializationError.
    """
    data = document_to_dict(document, extensions)
    try:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot encode OpenAPI document: {e}") from e
