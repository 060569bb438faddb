"""Gap detector — finds idle stretches between confirmed tour dates.

Only confirmed, dated stops ("anchors") bound a gap. Anchors are walked in
chronological order, which may differ from sequence order when the route has
not been re-optimized since dates changed. Provisional stops (holds and
earlier) never bound a gap but are recorded on it so the ranker does not
suggest the same venue or the same held date twice.

Gap dates exclude the anchor dates themselves: anchors on day 0 and day 10
give a gap from day 1 to day 9 with 9 idle days.
"""

import logging
import math
from datetime import date, timedelta

from tourwise.errors import InsufficientDataError, MissingCoordinateError
from tourwise.schemas.gap import Gap
from tourwise.schemas.tour import Stop, Tour
from tourwise.schemas.venue import Coordinate
from tourwise.services.routing import geo
from tourwise.services.routing.config import RoutingConfig, routing_config
from tourwise.services.routing.venue_status import HOLD_LEVELS, VenueStatus

logger = logging.getLogger(__name__)


class GapDetector:
    """Emits Gap intervals for a tour from its confirmed stops."""

    def __init__(self, config: RoutingConfig = routing_config):
        self.config = config

    def detect(
        self,
        tour: Tour,
        stops: list[Stop],
        venue_coordinates_by_id: dict[int, Coordinate | None] | None = None,
    ) -> list[Gap]:
        coords = venue_coordinates_by_id or {}
        try:
            anchor_days = self._anchor_days(stops)
        except InsufficientDataError:
            logger.debug(f"Tour {tour.id}: no confirmed dated stops, no gaps")
            return []

        provisional = [
            s for s in stops
            if s.status not in (VenueStatus.CONFIRMED, VenueStatus.CANCELLED)
        ]

        gaps: list[Gap] = []
        days = sorted(anchor_days)

        # Leading open gap
        first_day = days[0]
        if tour.start_date < first_day:
            first = anchor_days[first_day][0]
            gap = self._build_gap(
                tour, None, first, tour.start_date, first_day - timedelta(days=1),
                coords, provisional,
            )
            if gap:
                gaps.append(gap)

        for prev_day, next_day in zip(days, days[1:]):
            prev = anchor_days[prev_day][-1]
            nxt = anchor_days[next_day][0]
            gap = self._build_gap(
                tour, prev, nxt, prev_day + timedelta(days=1), next_day - timedelta(days=1),
                coords, provisional,
            )
            if gap:
                gaps.append(gap)

        # Trailing open gap
        last_day = days[-1]
        if tour.end_date > last_day:
            last = anchor_days[last_day][-1]
            gap = self._build_gap(
                tour, last, None, last_day + timedelta(days=1), tour.end_date,
                coords, provisional,
            )
            if gap:
                gaps.append(gap)

        logger.info(f"Tour {tour.id}: {len(gaps)} gap(s) across {len(days)} anchor date(s)")
        return gaps

    def max_travel_distance(self, idle_days: int) -> float:
        return idle_days * self.config.gaps.daily_travel_budget_km

    # ─── Helpers ───

    @staticmethod
    def _anchor_days(stops: list[Stop]) -> dict[date, list[Stop]]:
        """Confirmed dated stops grouped by date; same-date anchors collapse together."""
        by_day: dict[date, list[Stop]] = {}
        for stop in sorted(stops, key=lambda s: s.sequence):
            if stop.status == VenueStatus.CONFIRMED and stop.date is not None:
                by_day.setdefault(stop.date, []).append(stop)
        if not by_day:
            raise InsufficientDataError("No confirmed, dated stops to anchor gaps")
        return by_day

    def _build_gap(
        self,
        tour: Tour,
        prev: Stop | None,
        nxt: Stop | None,
        start: date,
        end: date,
        coords: dict[int, Coordinate | None],
        provisional: list[Stop],
    ) -> Gap | None:
        idle_days = (end - start).days + 1
        if idle_days < 1:
            return None

        prev_coord = coords.get(prev.venue_id) if prev else None
        next_coord = coords.get(nxt.venue_id) if nxt else None

        direct_km = None
        location = prev_coord or next_coord
        if prev and nxt:
            try:
                direct_km = geo.distance(prev_coord, next_coord, self.config.geo.earth_radius_km)
                location = geo.midpoint(prev_coord, next_coord)
            except MissingCoordinateError:
                logger.debug(f"Tour {tour.id}: gap {start}..{end} has an unlocated boundary")

        if not self._worth_emitting(idle_days, direct_km):
            return None

        held_dates = sorted({
            s.date for s in provisional
            if s.status in HOLD_LEVELS and s.date is not None and start <= s.date <= end
        })
        provisional_venue_ids = sorted({
            s.venue_id for s in provisional
            if s.date is None or start <= s.date <= end
        })

        return Gap(
            id=f"{tour.id}:{start.isoformat()}:{end.isoformat()}",
            tour_id=tour.id,
            previous_stop_id=prev.id if prev else None,
            next_stop_id=nxt.id if nxt else None,
            previous_venue_id=prev.venue_id if prev else None,
            next_venue_id=nxt.venue_id if nxt else None,
            start_date=start,
            end_date=end,
            idle_days=idle_days,
            previous_venue_coordinate=prev_coord,
            next_venue_coordinate=next_coord,
            location=location,
            direct_distance_km=direct_km,
            max_travel_distance_km=self.max_travel_distance(idle_days),
            held_dates=held_dates,
            provisional_venue_ids=provisional_venue_ids,
        )

    def _worth_emitting(self, idle_days: int, direct_km: float | None) -> bool:
        """Enough idle days, or fewer but with travel that eats whole days."""
        params = self.config.gaps
        if idle_days >= params.min_idle_days:
            return True
        if direct_km is None:
            return False
        travel_days = math.ceil(direct_km / params.daily_travel_budget_km)
        return travel_days > 1


gap_detector = GapDetector()
