from datetime import date as date_type
from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from tourwise.services.routing.venue_status import VenueStatus, parse_status


class Stop(BaseModel):
    """One venue booking in a tour; ``sequence`` is the authoritative route order."""
    id: int
    tour_id: int
    venue_id: int
    sequence: int = Field(ge=1)
    date: date_type | None = None
    status: VenueStatus = VenueStatus.POTENTIAL
    status_updated_at: datetime | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value):
        return parse_status(value)


class Tour(BaseModel):
    id: int
    artist_id: int
    name: str | None = None
    start_date: date_type
    end_date: date_type

    # Derived — recomputed on every stop mutation
    total_distance_km: float | None = None
    total_travel_time_minutes: int | None = None
    optimization_score: int | None = None

    # Snapshot captured on first assembly
    initial_total_distance_km: float | None = None
    initial_total_travel_time_minutes: int | None = None
    initial_optimization_score: int | None = None

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def _check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("Tour end_date precedes start_date")
        return self

    @property
    def has_initial_snapshot(self) -> bool:
        return not (
            self.initial_total_distance_km is None
            and self.initial_total_travel_time_minutes is None
            and self.initial_optimization_score is None
        )

    def improvement(self) -> dict:
        """Live minus initial for each derived field (None where either side is unset)."""

        def _delta(live, initial):
            if live is None or initial is None:
                return None
            return round(live - initial, 1)

        return {
            "total_distance_km": _delta(self.total_distance_km, self.initial_total_distance_km),
            "total_travel_time_minutes": _delta(
                self.total_travel_time_minutes, self.initial_total_travel_time_minutes
            ),
            "optimization_score": _delta(self.optimization_score, self.initial_optimization_score),
        }
