"""Network trust scorer — pairwise venue compatibility for collaborative booking.

Policy: capacity-tier similarity plus a same-region bonus. Literal distance is
kept in a separate, optional proximity bonus (off unless a radius is
configured) so the tier bucket and geography stay independent.

This is O(N²) over the venue population. Run it as a batch job when the venue
set changes and cache the edge list; do not call it per request.
"""

import logging
from dataclasses import dataclass, field

from tourwise.data.capacity_tiers import (
    CAPACITY_TIERS,
    MAX_TRUST_SCORE,
    MIN_TRUST_SCORE,
    SAME_REGION_BONUS,
    TIER_BASE_TRUST,
    TIER_COLLABORATION_LIKELIHOOD,
    TIER_UPPER_BOUNDS,
)
from tourwise.errors import MissingCoordinateError
from tourwise.schemas.network import NetworkEdge
from tourwise.schemas.venue import Coordinate, Venue
from tourwise.services.routing import geo
from tourwise.services.routing.config import RoutingConfig, routing_config

logger = logging.getLogger(__name__)


def classify_capacity(capacity: int) -> str:
    """small ≤500, medium ≤2000, large ≤5000, extra_large above."""
    for tier in CAPACITY_TIERS[:-1]:
        if capacity <= TIER_UPPER_BOUNDS[tier]:
            return tier
    return CAPACITY_TIERS[-1]


def tier_distance(tier_a: str, tier_b: str) -> int:
    return abs(CAPACITY_TIERS.index(tier_a) - CAPACITY_TIERS.index(tier_b))


def _normalize_region(region: str | None) -> str | None:
    if not region or not region.strip():
        return None
    return region.strip().lower()


@dataclass
class VenueIndex:
    """Dense venue-id → position arena with parallel attribute arrays."""

    ids: list[int] = field(default_factory=list)
    positions: dict[int, int] = field(default_factory=dict)
    tier_ranks: list[int] = field(default_factory=list)
    regions: list[str | None] = field(default_factory=list)
    coordinates: list[Coordinate | None] = field(default_factory=list)

    @classmethod
    def build(cls, venues: list[Venue]) -> "VenueIndex":
        index = cls()
        for venue in sorted(venues, key=lambda v: v.id):
            if venue.id in index.positions:
                raise ValueError(f"Duplicate venue id {venue.id} in network input")
            index.positions[venue.id] = len(index.ids)
            index.ids.append(venue.id)
            index.tier_ranks.append(CAPACITY_TIERS.index(classify_capacity(venue.capacity)))
            index.regions.append(_normalize_region(venue.region))
            index.coordinates.append(venue.coordinate)
        return index

    def __len__(self) -> int:
        return len(self.ids)


class NetworkTrustScorer:
    """Builds the symmetric NetworkEdge list for a venue population."""

    def __init__(self, config: RoutingConfig = routing_config):
        self.config = config

    def compute_edges(self, venues: list[Venue]) -> list[NetworkEdge]:
        index = VenueIndex.build(venues)
        edges: list[NetworkEdge] = []
        n = len(index)

        for i in range(n):
            for j in range(i + 1, n):
                edges.append(self._score_pair(index, i, j))

        logger.info(f"Venue network: {len(edges)} edges across {n} venues")
        return edges

    def score_pair(self, a: Venue, b: Venue) -> NetworkEdge:
        """Score a single pair without building an index for the whole population."""
        index = VenueIndex.build([a, b])
        return self._score_pair(index, 0, 1)

    def proximity_bonus(self, a: Coordinate | None, b: Coordinate | None) -> int:
        """Extra trust for venues within the configured radius; 0 when disabled."""
        params = self.config.trust
        if params.proximity_radius_km is None:
            return 0
        try:
            km = geo.distance(a, b, self.config.geo.earth_radius_km)
        except MissingCoordinateError:
            return 0
        return params.proximity_bonus if km <= params.proximity_radius_km else 0

    def _score_pair(self, index: VenueIndex, i: int, j: int) -> NetworkEdge:
        gap = abs(index.tier_ranks[i] - index.tier_ranks[j])
        same_region = index.regions[i] is not None and index.regions[i] == index.regions[j]

        trust = TIER_BASE_TRUST[gap]
        if same_region:
            trust += SAME_REGION_BONUS
        trust += self.proximity_bonus(index.coordinates[i], index.coordinates[j])

        return NetworkEdge(
            venue_id_a=index.ids[i],
            venue_id_b=index.ids[j],
            trust_score=max(MIN_TRUST_SCORE, min(MAX_TRUST_SCORE, trust)),
            collaboration_likelihood=TIER_COLLABORATION_LIKELIHOOD[gap],
            tier_distance=gap,
            same_region=same_region,
        )


def top_connections(edges: list[NetworkEdge], venue_id: int, limit: int | None = None) -> list[NetworkEdge]:
    """A venue's strongest partners: trust desc, likelihood desc, partner id asc."""
    cap = limit if limit is not None else routing_config.trust.top_connections
    mine = [e for e in edges if venue_id in (e.venue_id_a, e.venue_id_b)]
    mine.sort(key=lambda e: (-e.trust_score, -e.collaboration_likelihood, e.other(venue_id)))
    return mine[:cap]


network_trust_scorer = NetworkTrustScorer()
