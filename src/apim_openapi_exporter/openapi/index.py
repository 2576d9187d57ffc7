"""Lookup structures built over a route graph."""

from dataclasses import dataclass, field

from apim_openapi_exporter.errors import DuplicateSegmentError, UnknownSegmentError
from apim_openapi_exporter.graph.base import ApiGraph, Operation, Segment


@dataclass
class GraphIndex:
    """Segments by id, children by parent id, operations by segment id, roots.

    Child and operation lists keep the order of the source graph; roots keep
    segment order.
    """

    segments: dict[str, Segment] = field(default_factory=dict)
    children: dict[str, list[str]] = field(default_factory=dict)
    operations: dict[str, list[Operation]] = field(default_factory=dict)
    roots: list[str] = field(default_factory=list)

    @classmethod
    def build(cls, graph: ApiGraph) -> "GraphIndex":
        index = cls()

        for segment in graph.segments:
            if segment.id in index.segments:
                raise DuplicateSegmentError(segment.id)
            index.segments[segment.id] = segment

        has_parent = set()
        for edge in graph.edges:
            referrer = f"edge {edge.source!r} -> {edge.target!r}"
            for segment_id in (edge.source, edge.target):
                if segment_id not in index.segments:
                    raise UnknownSegmentError(segment_id, referrer)
            index.children.setdefault(edge.source, []).append(edge.target)
            has_parent.add(edge.target)

        for op in graph.operations:
            if op.path_segment_id not in index.segments:
                raise UnknownSegmentError(op.path_segment_id, f"operation {op.id!r}")
            index.operations.setdefault(op.path_segment_id, []).append(op)

        index.roots = [sid for sid in index.segments if sid not in has_parent]
        return index

    def children_of(self, segment_id: str) -> list[str]:
        return self.children.get(segment_id, [])

    def operations_at(self, segment_id: str) -> list[Operation]:
        return self.operations.get(segment_id, [])
