"""Route graph file loader.

Reads a graph from a YAML or JSON file into an ApiGraph model. Files may hold
the graph itself or a BuildOpenAPISpec request envelope (``apiGraph`` key).

Plain-form segments without ``kind`` are classified by their keys: a segment
carrying ``type`` or ``example`` is a path variable, anything else is a
literal. A path variable with neither key must say ``kind: param`` (or use
the ``{"param": {...}}`` wrapper), otherwise it is read as a literal segment.
"""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from apim_openapi_exporter.errors import GraphLoadError
from apim_openapi_exporter.graph.base import ApiGraph


def _read_text(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise GraphLoadError(f"cannot read {file_path}: {e}") from e


def detect_format(file_path: Path) -> str:
    """Detect the format of a graph file.

    Returns: 'yaml' or 'json'.
    """
    suffix = file_path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return "yaml"
    if suffix == ".json":
        return "json"

    text = _read_text(file_path).lstrip()
    if text.startswith(("{", "[")):
        return "json"
    return "yaml"


def load_graph(file_path: Path, fmt: str = "auto") -> ApiGraph:
    """Parse a graph file into an ApiGraph."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    text = _read_text(file_path)
    try:
        data = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise GraphLoadError(f"cannot parse {file_path} as {fmt}: {e}") from e

    return parse_graph(data, source=str(file_path))


def parse_graph(data: object, source: str = "<input>") -> ApiGraph:
    """Validate already-decoded graph data."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise GraphLoadError(f"{source}: expected a mapping at the top level")
    if "apiGraph" in data:
        data = data["apiGraph"] or {}

    try:
        return ApiGraph.model_validate(data)
    except ValidationError as e:
        raise GraphLoadError(f"{source}: invalid graph: {e}") from e
