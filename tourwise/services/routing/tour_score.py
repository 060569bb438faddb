"""Tour score calculator — per-leg travel metrics and the tour optimization score."""

import logging
from dataclasses import dataclass, field

from tourwise.errors import DuplicateSequenceError, InsufficientDataError, MissingCoordinateError
from tourwise.schemas.tour import Stop, Tour
from tourwise.schemas.venue import Coordinate
from tourwise.services.routing import geo
from tourwise.services.routing.config import RoutingConfig, routing_config
from tourwise.services.routing.venue_status import VenueStatus

logger = logging.getLogger(__name__)


# ---------- Data structures ----------


@dataclass
class LegMetrics:
    """Travel between two consecutive stops (by sequence)."""

    from_stop_id: int
    to_stop_id: int
    distance_km: float
    travel_time_minutes: int
    segment_score: int  # same formula as the tour score, applied to this leg alone

    def to_dict(self) -> dict:
        return {
            "from_stop_id": self.from_stop_id,
            "to_stop_id": self.to_stop_id,
            "distance_km": round(self.distance_km, 1),
            "travel_time_minutes": self.travel_time_minutes,
            "segment_score": self.segment_score,
        }


@dataclass
class TourScore:
    """Derived routing fields for a tour."""

    total_distance_km: float = 0.0
    total_travel_time_minutes: int = 0
    optimization_score: int = 100
    legs: list[LegMetrics] = field(default_factory=list)
    skipped_stop_ids: list[int] = field(default_factory=list)     # no resolvable coordinate
    inefficient_stop_ids: list[int] = field(default_factory=list)  # detour ratio over threshold

    def to_dict(self) -> dict:
        return {
            "total_distance_km": round(self.total_distance_km, 1),
            "total_travel_time_minutes": self.total_travel_time_minutes,
            "optimization_score": self.optimization_score,
            "legs": [leg.to_dict() for leg in self.legs],
            "skipped_stop_ids": list(self.skipped_stop_ids),
            "inefficient_stop_ids": list(self.inefficient_stop_ids),
        }

    def as_tour_fields(self) -> dict:
        return {
            "total_distance_km": self.total_distance_km,
            "total_travel_time_minutes": self.total_travel_time_minutes,
            "optimization_score": self.optimization_score,
        }


# ---------- Calculator ----------


class TourScoreCalculator:
    """Sums consecutive-leg distances and turns the total into a 0-100 score."""

    def __init__(self, config: RoutingConfig = routing_config):
        self.config = config

    def score_for_distance(self, distance_km: float) -> int:
        """100 at zero distance, linearly down to a floor of 100 - max_distance_penalty."""
        params = self.config.score
        penalty = min(params.max_distance_penalty, distance_km / params.km_per_penalty_point)
        return max(0, min(params.perfect_score, round(params.perfect_score - penalty)))

    def compute(
        self,
        stops: list[Stop],
        venue_coordinates_by_id: dict[int, Coordinate | None],
    ) -> TourScore:
        """Score the route in sequence order. Cancelled stops are not part of the route."""
        route = self._ordered_route(stops)
        coords = {s.id: venue_coordinates_by_id.get(s.venue_id) for s in route}
        skipped = [s.id for s in route if coords[s.id] is None]

        try:
            self._require_coordinates(route, coords)
        except InsufficientDataError as e:
            logger.debug(f"Trivial tour score: {e}")
            return TourScore(skipped_stop_ids=skipped)

        result = TourScore(skipped_stop_ids=skipped)
        for current, nxt in zip(route, route[1:]):
            try:
                leg_km = geo.distance(coords[current.id], coords[nxt.id], self.config.geo.earth_radius_km)
            except MissingCoordinateError:
                logger.debug(f"Skipping leg {current.id} -> {nxt.id}: missing coordinate")
                continue

            leg_minutes = geo.travel_time(leg_km, self.config.geo.average_speed_kmh)
            result.legs.append(LegMetrics(
                from_stop_id=current.id,
                to_stop_id=nxt.id,
                distance_km=leg_km,
                travel_time_minutes=leg_minutes,
                segment_score=self.score_for_distance(leg_km),
            ))
            result.total_distance_km += leg_km
            result.total_travel_time_minutes += leg_minutes

        result.optimization_score = self.score_for_distance(result.total_distance_km)
        result.inefficient_stop_ids = self._detour_stops(route, coords)
        return result

    def assemble_tour(
        self,
        tour: Tour,
        stops: list[Stop],
        venue_coordinates_by_id: dict[int, Coordinate | None],
    ) -> Tour:
        """Recompute live fields; capture the initial snapshot if the tour has none yet."""
        score = self.compute(stops, venue_coordinates_by_id)
        update = score.as_tour_fields()
        if not tour.has_initial_snapshot:
            update.update({
                "initial_total_distance_km": score.total_distance_km,
                "initial_total_travel_time_minutes": score.total_travel_time_minutes,
                "initial_optimization_score": score.optimization_score,
            })
        return tour.model_copy(update=update)

    def refresh_tour(
        self,
        tour: Tour,
        stops: list[Stop],
        venue_coordinates_by_id: dict[int, Coordinate | None],
    ) -> Tour:
        """Recompute live fields only; the initial snapshot is never touched."""
        score = self.compute(stops, venue_coordinates_by_id)
        return tour.model_copy(update=score.as_tour_fields())

    # ─── Helpers ───

    def _ordered_route(self, stops: list[Stop]) -> list[Stop]:
        seen: set[int] = set()
        for stop in stops:
            if stop.sequence in seen:
                raise DuplicateSequenceError(stop.tour_id, stop.sequence)
            seen.add(stop.sequence)
        active = [s for s in stops if s.status != VenueStatus.CANCELLED]
        return sorted(active, key=lambda s: s.sequence)

    @staticmethod
    def _require_coordinates(route: list[Stop], coords: dict[int, Coordinate | None]) -> None:
        located = sum(1 for s in route if coords[s.id] is not None)
        if located < 2:
            raise InsufficientDataError(f"{located} coordinate-bearing stop(s); need at least 2")

    def _detour_stops(self, route: list[Stop], coords: dict[int, Coordinate | None]) -> list[int]:
        """Stops where prev→stop→next is much longer than prev→next directly."""
        threshold = self.config.score.detour_ratio_threshold
        radius = self.config.geo.earth_radius_km
        flagged = []
        for prev, current, nxt in zip(route, route[1:], route[2:]):
            try:
                routed = geo.distance(coords[prev.id], coords[current.id], radius) + geo.distance(
                    coords[current.id], coords[nxt.id], radius
                )
                direct = geo.distance(coords[prev.id], coords[nxt.id], radius)
            except MissingCoordinateError:
                continue
            if direct > 0 and routed / direct > threshold:
                flagged.append(current.id)
        return flagged


tour_score_calculator = TourScoreCalculator()
