from pydantic import BaseModel, Field, model_validator


class Coordinate(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = {"frozen": True}


class Venue(BaseModel):
    id: int
    name: str | None = None
    city: str | None = None
    region: str | None = None  # state / province
    coordinate: Coordinate | None = None
    capacity: int = Field(default=0, ge=0)
    genres: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def _from_venue_row(cls, data):
        """Accept venues-table rows: flat latitude/longitude columns, nullable capacity."""
        if isinstance(data, BaseModel):
            return data
        if not isinstance(data, dict):
            data = {
                name: getattr(data, name)
                for name in (*cls.model_fields, "latitude", "longitude")
                if hasattr(data, name)
            }
        if data.get("coordinate") is None:
            lat, lng = data.get("latitude"), data.get("longitude")
            if lat is not None and lng is not None:
                data = {**data, "coordinate": {"latitude": lat, "longitude": lng}}
        if "capacity" in data and data["capacity"] is None:
            data = {**data, "capacity": 0}
        return data


class ArtistProfile(BaseModel):
    """Optional artist metadata used for capacity/genre affinity."""
    id: int
    genres: list[str] = Field(default_factory=list)
    preferred_capacity_min: int | None = Field(default=None, ge=0)
    preferred_capacity_max: int | None = Field(default=None, ge=0)

    model_config = {"from_attributes": True}
