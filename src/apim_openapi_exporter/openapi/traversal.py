"""Depth-first enumeration of concrete URL paths over a GraphIndex.

Each descent carries the path parts and inherited path parameters as tuples;
a child receives new tuples extended with its parent's contribution, so
sibling branches never see each other's parts or parameters. Query
parameters belong to their operation only and are never inherited.
"""

from typing import Literal

from apim_openapi_exporter.errors import CycleError, DuplicateRouteError
from apim_openapi_exporter.graph.base import Operation, ParamSegment
from apim_openapi_exporter.openapi.index import GraphIndex
from apim_openapi_exporter.openapi.models import (
    RESPONSE_DESCRIPTION,
    OperationEntry,
    Parameter,
)
from apim_openapi_exporter.openapi.schema import parameter_schema

ConflictPolicy = Literal["overwrite", "reject"]
CONFLICT_POLICIES = ("overwrite", "reject")

Paths = dict[str, dict[str, OperationEntry]]

_ENTER = True
_EXIT = False


def collect_paths(index: GraphIndex, on_conflict: ConflictPolicy = "overwrite") -> Paths:
    """Walk every root of the index and return ``{path: {method: entry}}``.

    With ``on_conflict="overwrite"`` an operation visited later replaces an
    earlier one with the same path and method; with ``"reject"`` the clash
    raises DuplicateRouteError.
    """
    if on_conflict not in CONFLICT_POLICIES:
        raise ValueError(f"unknown conflict policy: {on_conflict!r}")

    walker = _PathWalker(index, on_conflict)
    for root_id in index.roots:
        walker.walk(root_id)

    unvisited = [sid for sid in index.segments if sid not in walker.visited]
    if unvisited:
        # Nothing reaches these from a root, so they hang off a rootless cycle.
        raise CycleError(_rootless_cycle(index, unvisited[0]))
    return walker.paths


class _PathWalker:
    def __init__(self, index: GraphIndex, on_conflict: ConflictPolicy):
        self.index = index
        self.on_conflict = on_conflict
        self.paths: Paths = {}
        self.visited: set[str] = set()
        self._owners: dict[tuple[str, str], str] = {}
        self._trail: list[str] = []
        self._on_trail: set[str] = set()

    def walk(self, root_id: str) -> None:
        """Depth-first from one root, children in edge order.

        Uses an explicit stack so nesting depth is not bounded by the
        interpreter's recursion limit. An ``_EXIT`` frame is pushed below a
        segment's children and takes the segment off the trail once they are
        all done.
        """
        stack: list[tuple[bool, str, tuple[str, ...], tuple[Parameter, ...]]] = [
            (_ENTER, root_id, (), ())
        ]
        while stack:
            action, segment_id, parts, inherited = stack.pop()
            if action is _EXIT:
                self._trail.pop()
                self._on_trail.discard(segment_id)
                continue

            if segment_id in self._on_trail:
                start = self._trail.index(segment_id)
                raise CycleError(self._trail[start:] + [segment_id])

            parts, inherited = self._visit(segment_id, parts, inherited)

            self._trail.append(segment_id)
            self._on_trail.add(segment_id)
            stack.append((_EXIT, segment_id, (), ()))
            for child_id in reversed(self.index.children_of(segment_id)):
                stack.append((_ENTER, child_id, parts, inherited))

    def _visit(
        self,
        segment_id: str,
        parts: tuple[str, ...],
        inherited: tuple[Parameter, ...],
    ) -> tuple[tuple[str, ...], tuple[Parameter, ...]]:
        """Emit the segment's operations; return the state its children get."""
        segment = self.index.segments[segment_id]
        if isinstance(segment, ParamSegment):
            part = f"{{{segment.name}}}"
            inherited = inherited + (
                Parameter(
                    name=segment.name,
                    location="path",
                    required=True,
                    schema_=parameter_schema(segment.type),
                    example=segment.example,
                ),
            )
        else:
            part = segment.name
        parts = parts + (part,)

        self.visited.add(segment_id)
        operations = self.index.operations_at(segment_id)
        if operations:
            path = "/" + "/".join(parts)
            for op in operations:
                self._emit(path, op, inherited)
        return parts, inherited

    def _emit(self, path: str, op: Operation, inherited: tuple[Parameter, ...]) -> None:
        method = op.method.lower()
        key = (path, method)
        if key in self._owners and self.on_conflict == "reject":
            raise DuplicateRouteError(path, method, self._owners[key], op.id)
        self._owners[key] = op.id

        self.paths.setdefault(path, {})[method] = OperationEntry(
            summary=op.id,
            parameters=[*inherited, *_query_parameters(op)],
            responses=_responses(op.status_codes),
        )


def _query_parameters(op: Operation) -> list[Parameter]:
    return [
        Parameter(
            name=qp.name,
            location="query",
            required=False,
            schema_=parameter_schema(qp.type),
            example=qp.example,
        )
        for qp in op.query_parameters
    ]


def _responses(status_codes: list[int]) -> dict[str, dict[str, str]]:
    return {str(code): dict(RESPONSE_DESCRIPTION) for code in sorted(set(status_codes))}


def _rootless_cycle(index: GraphIndex, start_id: str) -> list[str]:
    """Follow parent links from an unreachable segment until one repeats."""
    parents: dict[str, str] = {}
    for parent_id, child_ids in index.children.items():
        for child_id in child_ids:
            parents.setdefault(child_id, parent_id)

    seen: list[str] = []
    current = start_id
    while current not in seen:
        seen.append(current)
        current = parents[current]
    cycle = seen[seen.index(current):]
    cycle.reverse()
    return cycle + [cycle[0]]
