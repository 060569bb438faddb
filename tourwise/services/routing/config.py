"""Routing engine configuration — single source for all thresholds."""

from dataclasses import dataclass, field

from tourwise.config import Settings, settings


@dataclass(frozen=True)
class GeoParams:
    """Great-circle and travel-time model."""
    earth_radius_km: float = 6371.0
    average_speed_kmh: float = 50.0   # road-speed proxy, not a routing engine


@dataclass(frozen=True)
class ScoreParams:
    """Tour optimization score."""
    perfect_score: int = 100
    max_distance_penalty: float = 50.0   # score never drops below 50 from distance
    km_per_penalty_point: float = 10.0
    detour_ratio_threshold: float = 1.5  # prev→cur→next vs prev→next


@dataclass(frozen=True)
class GapParams:
    """Gap detection thresholds."""
    min_idle_days: int = 1
    daily_travel_budget_km: float = 600.0


@dataclass(frozen=True)
class RankingParams:
    """Gap suggestion scoring. Weights are relative, not required to sum to 1."""
    weight_distance: float = 1.0
    weight_slack: float = 1.0
    weight_affinity: float = 1.0
    neutral_score: float = 0.5
    max_suggestions: int = 10


@dataclass(frozen=True)
class TrustParams:
    """Venue network scoring. Proximity bonus is off while the radius is None."""
    proximity_radius_km: float | None = None
    proximity_bonus: int = 5
    top_connections: int = 5


@dataclass(frozen=True)
class RoutingConfig:
    """Top-level config aggregating all sub-configs."""
    geo: GeoParams = field(default_factory=GeoParams)
    score: ScoreParams = field(default_factory=ScoreParams)
    gaps: GapParams = field(default_factory=GapParams)
    ranking: RankingParams = field(default_factory=RankingParams)
    trust: TrustParams = field(default_factory=TrustParams)

    @classmethod
    def from_settings(cls, s: Settings) -> "RoutingConfig":
        return cls(
            geo=GeoParams(average_speed_kmh=s.average_speed_kmh),
            gaps=GapParams(
                min_idle_days=s.min_idle_days,
                daily_travel_budget_km=s.daily_travel_budget_km,
            ),
            ranking=RankingParams(
                weight_distance=s.match_weight_distance,
                weight_slack=s.match_weight_slack,
                weight_affinity=s.match_weight_affinity,
                max_suggestions=s.max_gap_suggestions,
            ),
            trust=TrustParams(
                proximity_radius_km=s.network_proximity_radius_km,
                proximity_bonus=s.network_proximity_bonus,
            ),
        )


# Singleton — import this everywhere
routing_config = RoutingConfig.from_settings(settings)
