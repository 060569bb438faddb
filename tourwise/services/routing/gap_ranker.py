"""Gap suggestion ranker — scores candidate venues for one gap.

Scoring dimensions (weights in RankingParams, equal by default):
  Distance fit   — detour over the straight anchor-to-anchor line, relative to
                   the gap's travel budget
  Slack fit      — worst leg's driving time against the days available for it
  Affinity       — capacity range and genre overlap with the artist; neutral
                   when either side lacks the metadata

Ordering is deterministic: score desc, added distance asc, venue id asc.
"""

import logging
import math
from datetime import date, timedelta

from tourwise.errors import MissingCoordinateError
from tourwise.schemas.gap import Gap, GapSuggestion
from tourwise.schemas.tour import Stop
from tourwise.schemas.venue import ArtistProfile, Venue
from tourwise.services.routing import geo
from tourwise.services.routing.config import RoutingConfig, routing_config
from tourwise.services.routing.venue_status import VenueStatus, status_for_detour

logger = logging.getLogger(__name__)


class GapSuggestionRanker:
    """Filters, scores and orders gap-filling venue candidates."""

    def __init__(self, config: RoutingConfig = routing_config):
        self.config = config

    def rank(
        self,
        gap: Gap,
        candidate_venues: list[Venue],
        today: date,
        existing_stops: list[Stop] | None = None,
        artist: ArtistProfile | None = None,
        limit: int | None = None,
    ) -> list[GapSuggestion]:
        """Return ranked suggestions; an empty eligible pool gives an empty list."""
        feasible_dates = self._feasible_dates(gap, today)
        if not feasible_dates:
            logger.debug(f"Gap {gap.id}: no open dates on or after {today}")
            return []

        excluded = self._excluded_venue_ids(gap, existing_stops or [])

        suggestions: list[GapSuggestion] = []
        for venue in candidate_venues:
            if venue.id in excluded:
                continue
            try:
                suggestion = self._evaluate(gap, venue, feasible_dates, artist)
            except MissingCoordinateError:
                logger.debug(f"Gap {gap.id}: skipping venue {venue.id}, no coordinate")
                continue
            if suggestion is not None:
                suggestions.append(suggestion)

        suggestions.sort(
            key=lambda s: (-s.match_score, s.added_distance_km, s.candidate_venue_id)
        )
        cap = limit if limit is not None else self.config.ranking.max_suggestions
        logger.info(
            f"Gap {gap.id}: {len(suggestions)} eligible of {len(candidate_venues)} candidates"
        )
        return suggestions[:cap]

    # ─── Candidate evaluation ───

    def _evaluate(
        self,
        gap: Gap,
        venue: Venue,
        feasible_dates: list[date],
        artist: ArtistProfile | None,
    ) -> GapSuggestion | None:
        if venue.coordinate is None:
            raise MissingCoordinateError(f"Venue {venue.id} has no coordinate", venue_id=venue.id)

        radius = self.config.geo.earth_radius_km
        from_prev = geo.leg_distance(gap.previous_venue_coordinate, venue.coordinate, radius)
        to_next = geo.leg_distance(venue.coordinate, gap.next_venue_coordinate, radius)

        max_km = gap.max_travel_distance_km
        if any(d is not None and d > max_km for d in (from_prev, to_next)):
            return None

        added_km, deviation_pct = self._added_distance(gap, from_prev, to_next)
        suggested = self._pick_date(gap, feasible_dates, from_prev, to_next)

        params = self.config.ranking
        components = (
            (params.weight_distance, self._distance_fit(added_km, max_km)),
            (params.weight_slack, self._slack_fit(gap, suggested, from_prev, to_next)),
            (params.weight_affinity, self._affinity(venue, artist)),
        )
        total_weight = sum(w for w, _ in components)
        if total_weight <= 0:
            composite = params.neutral_score
        else:
            composite = sum(w * score for w, score in components) / total_weight

        return GapSuggestion(
            gap_id=gap.id,
            candidate_venue_id=venue.id,
            suggested_date=suggested,
            match_score=max(0, min(100, round(composite * 100))),
            travel_distance_from_previous_km=from_prev,
            travel_distance_to_next_km=to_next,
            added_distance_km=added_km,
            recommended_status=status_for_detour(deviation_pct),
        )

    def _added_distance(
        self, gap: Gap, from_prev: float | None, to_next: float | None
    ) -> tuple[float, float]:
        """Extra km this venue puts on the route, and that as a percentage of the direct line."""
        if from_prev is not None and to_next is not None:
            direct = gap.direct_distance_km
            if direct is None:
                direct = geo.distance(
                    gap.previous_venue_coordinate,
                    gap.next_venue_coordinate,
                    self.config.geo.earth_radius_km,
                )
            added = max(0.0, from_prev + to_next - direct)
            if direct > 0:
                return added, added / direct * 100
            return added, 0.0 if added == 0 else math.inf

        known = from_prev if from_prev is not None else to_next
        if known is None:
            return 0.0, 0.0
        budget = gap.max_travel_distance_km
        return known, (known / budget * 100) if budget > 0 else 0.0

    @staticmethod
    def _distance_fit(added_km: float, max_km: float) -> float:
        if max_km <= 0:
            return 1.0 if added_km == 0 else 0.0
        return 1.0 - min(1.0, added_km / max_km)

    def _slack_fit(
        self,
        gap: Gap,
        suggested: date,
        from_prev: float | None,
        to_next: float | None,
    ) -> float:
        """1.0 when driving is trivial for the days available, 0.0 when it eats them all."""
        speed = self.config.geo.average_speed_kmh
        daily_minutes = self.config.gaps.daily_travel_budget_km / speed * 60

        # Anchor dates sit one day outside the gap on either side
        ratios = []
        if from_prev is not None:
            days = (suggested - (gap.start_date - timedelta(days=1))).days
            ratios.append(geo.travel_time(from_prev, speed) / (days * daily_minutes))
        if to_next is not None:
            days = ((gap.end_date + timedelta(days=1)) - suggested).days
            ratios.append(geo.travel_time(to_next, speed) / (days * daily_minutes))
        if not ratios:
            return self.config.ranking.neutral_score
        return 1.0 - min(1.0, max(ratios))

    def _affinity(self, venue: Venue, artist: ArtistProfile | None) -> float:
        neutral = self.config.ranking.neutral_score
        if artist is None:
            return neutral

        parts = []
        capacity_fit = self._capacity_fit(venue.capacity, artist)
        if capacity_fit is not None:
            parts.append(capacity_fit)

        venue_genres = {g.strip().lower() for g in venue.genres if g.strip()}
        artist_genres = {g.strip().lower() for g in artist.genres if g.strip()}
        if venue_genres and artist_genres:
            parts.append(len(venue_genres & artist_genres) / len(venue_genres | artist_genres))

        return sum(parts) / len(parts) if parts else neutral

    @staticmethod
    def _capacity_fit(capacity: int, artist: ArtistProfile) -> float | None:
        """1.0 inside the preferred range, falling off linearly outside it. 0 capacity = unknown."""
        low, high = artist.preferred_capacity_min, artist.preferred_capacity_max
        if not capacity or (low is None and high is None):
            return None
        if low is not None and capacity < low:
            return 1.0 - min(1.0, (low - capacity) / low)
        if high is not None and capacity > high:
            return 1.0 - min(1.0, (capacity - high) / high) if high > 0 else 0.0
        return 1.0

    # ─── Dates ───

    @staticmethod
    def _feasible_dates(gap: Gap, today: date) -> list[date]:
        held = set(gap.held_dates)
        first = max(gap.start_date, today)
        days = (gap.end_date - first).days + 1
        candidates = (first + timedelta(days=i) for i in range(max(0, days)))
        return [d for d in candidates if d not in held]

    def _pick_date(
        self,
        gap: Gap,
        feasible_dates: list[date],
        from_prev: float | None,
        to_next: float | None,
    ) -> date:
        """Place the show proportionally along the gap, then snap to the closest open date."""
        span = gap.idle_days - 1
        budget = self.config.gaps.daily_travel_budget_km

        if from_prev is not None and to_next is not None:
            total = from_prev + to_next
            fraction = from_prev / total if total > 0 else 0.5
            ideal = gap.start_date + timedelta(days=round(fraction * span))
        elif from_prev is not None:
            lead = max(0, math.ceil(from_prev / budget) - 1)
            ideal = gap.start_date + timedelta(days=min(lead, span))
        elif to_next is not None:
            lead = max(0, math.ceil(to_next / budget) - 1)
            ideal = gap.end_date - timedelta(days=min(lead, span))
        else:
            ideal = gap.start_date + timedelta(days=span // 2)

        return min(feasible_dates, key=lambda d: (abs((d - ideal).days), d))

    # ─── Exclusions ───

    @staticmethod
    def _excluded_venue_ids(gap: Gap, existing_stops: list[Stop]) -> set[int]:
        excluded = set(gap.provisional_venue_ids)
        excluded.update(s.venue_id for s in existing_stops if s.status != VenueStatus.CANCELLED)
        excluded.update(v for v in (gap.previous_venue_id, gap.next_venue_id) if v is not None)
        return excluded


gap_suggestion_ranker = GapSuggestionRanker()
