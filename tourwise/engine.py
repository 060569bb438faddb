"""Engine entry points consumed by the CRUD/API layer.

Every function is pure: inputs are the persisted entities, outputs are new
values for the caller to store. Re-run after any stop mutation rather than
patching previous results.
"""

from datetime import date, datetime

from tourwise.schemas.gap import Gap, GapSuggestion
from tourwise.schemas.network import NetworkEdge
from tourwise.schemas.tour import Stop, Tour
from tourwise.schemas.venue import ArtistProfile, Coordinate, Venue
from tourwise.services.routing.gap_detector import gap_detector
from tourwise.services.routing.gap_ranker import gap_suggestion_ranker
from tourwise.services.routing.network_trust import network_trust_scorer
from tourwise.services.routing.network_trust import top_connections as _top_connections
from tourwise.services.routing.tour_score import TourScore, tour_score_calculator
from tourwise.services.routing.venue_status import VenueStatus
from tourwise.services.routing.venue_status import apply_status as _apply_status
from tourwise.services.routing.venue_status import transition_status as _transition_status


def compute_tour_score(
    stops: list[Stop],
    venue_coordinates_by_id: dict[int, Coordinate | None],
) -> TourScore:
    return tour_score_calculator.compute(stops, venue_coordinates_by_id)


def assemble_tour(
    tour: Tour,
    stops: list[Stop],
    venue_coordinates_by_id: dict[int, Coordinate | None],
) -> Tour:
    """First assembly: live fields plus the initial snapshot (if not already taken)."""
    return tour_score_calculator.assemble_tour(tour, stops, venue_coordinates_by_id)


def refresh_tour(
    tour: Tour,
    stops: list[Stop],
    venue_coordinates_by_id: dict[int, Coordinate | None],
) -> Tour:
    return tour_score_calculator.refresh_tour(tour, stops, venue_coordinates_by_id)


def detect_gaps(
    tour: Tour,
    stops: list[Stop],
    venue_coordinates_by_id: dict[int, Coordinate | None] | None = None,
) -> list[Gap]:
    return gap_detector.detect(tour, stops, venue_coordinates_by_id)


def rank_gap_suggestions(
    gap: Gap,
    candidate_venues: list[Venue],
    today: date,
    existing_stops: list[Stop] | None = None,
    artist: ArtistProfile | None = None,
    limit: int | None = None,
) -> list[GapSuggestion]:
    return gap_suggestion_ranker.rank(
        gap,
        candidate_venues,
        today,
        existing_stops=existing_stops,
        artist=artist,
        limit=limit,
    )


def transition_status(current_status, requested_status, allow_demotion: bool = False) -> VenueStatus:
    """New status, or InvalidTransitionError."""
    return _transition_status(current_status, requested_status, allow_demotion=allow_demotion)


def apply_status(
    stop: Stop,
    requested_status,
    now: datetime | None = None,
    allow_demotion: bool = False,
) -> Stop:
    return _apply_status(stop, requested_status, now=now, allow_demotion=allow_demotion)


def compute_network_edges(venues: list[Venue]) -> list[NetworkEdge]:
    return network_trust_scorer.compute_edges(venues)


def top_connections(edges: list[NetworkEdge], venue_id: int, limit: int | None = None) -> list[NetworkEdge]:
    return _top_connections(edges, venue_id, limit)


def venue_coordinates(venues: list[Venue]) -> dict[int, Coordinate | None]:
    """The venue-id → coordinate map the tour and gap entry points expect."""
    return {v.id: v.coordinate for v in venues}
