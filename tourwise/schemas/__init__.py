from tourwise.schemas.gap import Gap, GapSuggestion
from tourwise.schemas.network import NetworkEdge
from tourwise.schemas.tour import Stop, Tour
from tourwise.schemas.venue import ArtistProfile, Coordinate, Venue

__all__ = [
    "ArtistProfile",
    "Coordinate",
    "Gap",
    "GapSuggestion",
    "NetworkEdge",
    "Stop",
    "Tour",
    "Venue",
]
