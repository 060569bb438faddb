from pydantic import BaseModel, Field, model_validator


class NetworkEdge(BaseModel):
    """Symmetric venue pair; ids are stored in canonical order (a < b).

    ``collaboration_likelihood`` is a heuristic prior derived from capacity
    tiers, not an observed booking frequency.
    """
    venue_id_a: int
    venue_id_b: int
    trust_score: int = Field(ge=50, le=100)
    collaboration_likelihood: float = Field(ge=0, le=1)
    tier_distance: int = Field(default=0, ge=0, le=3)
    same_region: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _canonical_order(cls, data):
        if isinstance(data, dict):
            a, b = data.get("venue_id_a"), data.get("venue_id_b")
            if a is not None and b is not None:
                if a == b:
                    raise ValueError("A venue cannot be connected to itself")
                if a > b:
                    data = {**data, "venue_id_a": b, "venue_id_b": a}
        return data

    def other(self, venue_id: int) -> int:
        return self.venue_id_b if venue_id == self.venue_id_a else self.venue_id_a
