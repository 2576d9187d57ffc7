import pytest

from apim_openapi_exporter.errors import DuplicateSegmentError, MalformedGraphError, UnknownSegmentError
from apim_openapi_exporter.graph.base import ApiGraph
from apim_openapi_exporter.openapi.index import GraphIndex


def _graph(segments, edges=(), operations=()) -> ApiGraph:
    return ApiGraph.model_validate({
        "segments": [{"id": sid, "name": sid} for sid in segments],
        "edges": [{"from": a, "to": b} for a, b in edges],
        "operations": list(operations),
    })


class TestGraphIndex:
    def test_segments_by_id(self):
        index = GraphIndex.build(_graph(["a", "b"]))
        assert set(index.segments) == {"a", "b"}
        assert index.segments["b"].name == "b"

    def test_children_keep_edge_order(self):
        index = GraphIndex.build(_graph(["r", "x", "y", "z"], [("r", "z"), ("r", "x"), ("r", "y")]))
        assert index.children_of("r") == ["z", "x", "y"]
        assert index.children_of("x") == []

    def test_operations_grouped_in_order(self):
        ops = [
            {"id": "op1", "pathSegmentId": "a", "method": "GET"},
            {"id": "op2", "pathSegmentId": "b", "method": "GET"},
            {"id": "op3", "pathSegmentId": "a", "method": "POST"},
        ]
        index = GraphIndex.build(_graph(["a", "b"], operations=ops))
        assert [op.id for op in index.operations_at("a")] == ["op1", "op3"]
        assert [op.id for op in index.operations_at("b")] == ["op2"]

    def test_roots_in_segment_order(self):
        index = GraphIndex.build(_graph(["c", "a", "b", "d"], [("a", "b"), ("c", "d")]))
        assert index.roots == ["c", "a"]

    def test_unknown_edge_target(self):
        with pytest.raises(UnknownSegmentError) as exc_info:
            GraphIndex.build(_graph(["a"], [("a", "ghost")]))
        assert exc_info.value.segment_id == "ghost"
        assert "edge" in str(exc_info.value)

    def test_unknown_edge_source(self):
        with pytest.raises(UnknownSegmentError):
            GraphIndex.build(_graph(["a"], [("ghost", "a")]))

    def test_unknown_operation_segment(self):
        ops = [{"id": "orphan", "pathSegmentId": "ghost", "method": "GET"}]
        with pytest.raises(UnknownSegmentError, match="orphan"):
            GraphIndex.build(_graph(["a"], operations=ops))

    def test_duplicate_segment_id(self):
        with pytest.raises(DuplicateSegmentError):
            GraphIndex.build(_graph(["a", "a"]))

    def test_errors_are_malformed_graph(self):
        with pytest.raises(MalformedGraphError):
            GraphIndex.build(_graph(["a"], [("a", "ghost")]))
