from datetime import date

from pydantic import BaseModel, Field

from tourwise.schemas.venue import Coordinate
from tourwise.services.routing.venue_status import VenueStatus


class Gap(BaseModel):
    """An idle stretch of a tour bounded by confirmed stops (or the tour window)."""
    id: str
    tour_id: int
    previous_stop_id: int | None = None
    next_stop_id: int | None = None
    previous_venue_id: int | None = None
    next_venue_id: int | None = None
    start_date: date
    end_date: date
    idle_days: int = Field(ge=1)
    previous_venue_coordinate: Coordinate | None = None
    next_venue_coordinate: Coordinate | None = None
    location: Coordinate | None = None
    direct_distance_km: float | None = Field(default=None, ge=0)
    max_travel_distance_km: float = Field(ge=0)
    held_dates: list[date] = Field(default_factory=list)
    provisional_venue_ids: list[int] = Field(default_factory=list)

    @property
    def is_open_ended(self) -> bool:
        return self.previous_stop_id is None or self.next_stop_id is None


class GapSuggestion(BaseModel):
    gap_id: str
    candidate_venue_id: int
    suggested_date: date
    match_score: int = Field(ge=0, le=100)
    travel_distance_from_previous_km: float | None = Field(default=None, ge=0)
    travel_distance_to_next_km: float | None = Field(default=None, ge=0)
    added_distance_km: float = Field(default=0.0, ge=0)
    recommended_status: VenueStatus = VenueStatus.SUGGESTED
