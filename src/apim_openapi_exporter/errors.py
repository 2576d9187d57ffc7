"""Error taxonomy for graph loading, OpenAPI generation and serialization."""


class ExporterError(Exception):
    """Base class for every failure raised by the exporter."""


class GraphLoadError(ExporterError):
    """A graph file could not be read, parsed or validated."""


class MalformedGraphError(ExporterError):
    """The route graph violates a structural invariant."""


class DuplicateSegmentError(MalformedGraphError):
    def __init__(self, segment_id: str):
        self.segment_id = segment_id
        super().__init__(f"duplicate segment id {segment_id!r}")


class UnknownSegmentError(MalformedGraphError):
    """An edge or operation references a segment id that does not exist."""

    def __init__(self, segment_id: str, referrer: str):
        self.segment_id = segment_id
        self.referrer = referrer
        super().__init__(f"{referrer} references unknown segment {segment_id!r}")


class CycleError(MalformedGraphError):
    def __init__(self, segment_ids: list[str]):
        self.segment_ids = segment_ids
        super().__init__("cycle detected among segments: " + " -> ".join(segment_ids))


class DuplicateRouteError(MalformedGraphError):
    """Two operations resolve to the same path and method."""

    def __init__(self, path: str, method: str, first_id: str, second_id: str):
        self.path = path
        self.method = method
        self.operation_ids = (first_id, second_id)
        super().__init__(
            f"{method.upper()} {path} is declared by both {first_id!r} and {second_id!r}"
        )


class SerializationError(ExporterError):
    """The assembled document could not be encoded as JSON."""
