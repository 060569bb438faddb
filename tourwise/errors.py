"""Routing engine errors.

All of these are local, recoverable conditions. They subclass ValueError so
callers that already guard domain failures with ``except ValueError`` keep
working.
"""


class RoutingEngineError(ValueError):
    """Base class for routing engine failures."""


class MissingCoordinateError(RoutingEngineError):
    """A distance or travel-time computation was asked for an unresolved coordinate."""

    def __init__(self, message: str = "Coordinate is missing", venue_id: int | None = None):
        super().__init__(message)
        self.venue_id = venue_id


class InvalidTransitionError(RoutingEngineError):
    """A stop's booking status was asked to make an illegal move."""

    def __init__(self, current, requested, reason: str | None = None):
        self.current = current
        self.requested = requested
        detail = f"Cannot move stop status from {_value(current)} to {_value(requested)}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


class InsufficientDataError(RoutingEngineError):
    """Not enough coordinate-bearing stops or anchors to compute a result."""


class DuplicateSequenceError(RoutingEngineError):
    """Two stops of the same tour share a sequence number."""

    def __init__(self, tour_id, sequence: int):
        self.tour_id = tour_id
        self.sequence = sequence
        super().__init__(f"Tour {tour_id} has more than one stop at sequence {sequence}")


def _value(status) -> str:
    return getattr(status, "value", status)
