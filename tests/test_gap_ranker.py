import pytest

from tests.helpers import day, east_of_origin, make_stop, make_tour, north_of
from tourwise.schemas.venue import ArtistProfile, Venue
from tourwise.services.routing.config import RankingParams, RoutingConfig
from tourwise.services.routing.gap_detector import gap_detector
from tourwise.services.routing.gap_ranker import GapSuggestionRanker, gap_suggestion_ranker
from tourwise.services.routing.venue_status import VenueStatus

TODAY = day(-30)


@pytest.fixture
def interior_gap():
    """Anchors at 0 km on day 0 and 500 km on day 10."""
    coords = {1: east_of_origin(0), 2: east_of_origin(500)}
    stops = [make_stop(1, 1, 1, on_day=0), make_stop(2, 2, 2, on_day=10)]
    return gap_detector.detect(make_tour(10), stops, coords)[0]


@pytest.fixture
def trailing_gap():
    coords = {1: east_of_origin(0)}
    return gap_detector.detect(make_tour(30), [make_stop(1, 1, 1, on_day=10)], coords)[-1]


def venue(venue_id, coordinate, capacity=800, genres=None, region="EQ"):
    return Venue(id=venue_id, coordinate=coordinate, capacity=capacity, genres=genres or [], region=region)


def test_empty_pool_gives_empty_list(interior_gap):
    assert gap_suggestion_ranker.rank(interior_gap, [], TODAY) == []


def test_on_route_venue_ranks_first(interior_gap):
    candidates = [
        venue(11, north_of(east_of_origin(250), 200)),
        venue(10, east_of_origin(250)),
        venue(12, east_of_origin(6000)),  # beyond the gap's travel budget
        venue(13, None),
    ]

    ranked = gap_suggestion_ranker.rank(interior_gap, candidates, TODAY)

    assert [s.candidate_venue_id for s in ranked] == [10, 11]
    assert ranked[0].match_score > ranked[1].match_score


def test_on_route_suggestion_details(interior_gap):
    best = gap_suggestion_ranker.rank(interior_gap, [venue(10, east_of_origin(250))], TODAY)[0]

    assert best.gap_id == interior_gap.id
    assert best.suggested_date == day(5)
    assert best.travel_distance_from_previous_km == pytest.approx(250)
    assert best.travel_distance_to_next_km == pytest.approx(250)
    assert best.added_distance_km == pytest.approx(0, abs=1e-6)
    assert best.recommended_status == VenueStatus.HOLD1
    assert 0 <= best.match_score <= 100


def test_suggested_date_leans_toward_the_nearer_anchor(interior_gap):
    near_start = gap_suggestion_ranker.rank(interior_gap, [venue(10, east_of_origin(50))], TODAY)[0]
    near_end = gap_suggestion_ranker.rank(interior_gap, [venue(10, east_of_origin(450))], TODAY)[0]
    assert near_start.suggested_date < near_end.suggested_date


def test_ties_break_by_venue_id(interior_gap):
    spot = east_of_origin(250)
    candidates = [venue(21, spot), venue(20, spot), venue(22, spot)]

    first = gap_suggestion_ranker.rank(interior_gap, candidates, TODAY)
    second = gap_suggestion_ranker.rank(interior_gap, list(reversed(candidates)), TODAY)

    assert [s.candidate_venue_id for s in first] == [20, 21, 22]
    assert first == second


def test_venues_already_on_the_tour_are_excluded(interior_gap):
    candidates = [
        venue(1, east_of_origin(0)),
        venue(10, east_of_origin(250)),
        venue(11, east_of_origin(260)),
    ]
    existing = [
        make_stop(5, 10, 5, status="hold1", on_day=20),
        make_stop(6, 11, 6, status="cancelled", on_day=21),
    ]

    ranked = gap_suggestion_ranker.rank(interior_gap, candidates, TODAY, existing_stops=existing)

    assert [s.candidate_venue_id for s in ranked] == [11]


def test_provisional_venues_in_the_gap_are_excluded(interior_gap):
    gap = interior_gap.model_copy(update={"provisional_venue_ids": [10]})
    ranked = gap_suggestion_ranker.rank(gap, [venue(10, east_of_origin(250))], TODAY)
    assert ranked == []


def test_gap_in_the_past_has_no_suggestions(interior_gap):
    assert gap_suggestion_ranker.rank(interior_gap, [venue(10, east_of_origin(250))], day(12)) == []


def test_today_clips_the_suggested_date(interior_gap):
    ranked = gap_suggestion_ranker.rank(interior_gap, [venue(10, east_of_origin(250))], day(7))
    assert ranked[0].suggested_date == day(7)


def test_held_dates_are_avoided(interior_gap):
    gap = interior_gap.model_copy(update={"held_dates": [day(5)]})
    ranked = gap_suggestion_ranker.rank(gap, [venue(10, east_of_origin(250))], TODAY)
    assert ranked[0].suggested_date == day(4)


def test_fully_held_gap_has_no_suggestions(interior_gap):
    gap = interior_gap.model_copy(update={"held_dates": [day(d) for d in range(1, 10)]})
    assert gap_suggestion_ranker.rank(gap, [venue(10, east_of_origin(250))], TODAY) == []


def test_results_are_capped(interior_gap):
    candidates = [venue(100 + i, east_of_origin(10 * i)) for i in range(1, 16)]

    assert len(gap_suggestion_ranker.rank(interior_gap, candidates, TODAY)) == 10
    assert len(gap_suggestion_ranker.rank(interior_gap, candidates, TODAY, limit=3)) == 3


def test_capacity_and_genre_affinity(interior_gap):
    spot = east_of_origin(250)
    artist = ArtistProfile(id=42, genres=["Indie", "Folk"], preferred_capacity_min=500, preferred_capacity_max=1000)
    candidates = [
        venue(30, spot, capacity=5000),
        venue(31, spot, capacity=800, genres=["indie", "rock"]),
    ]

    ranked = gap_suggestion_ranker.rank(interior_gap, candidates, TODAY, artist=artist)

    assert [s.candidate_venue_id for s in ranked] == [31, 30]
    assert ranked[0].match_score > ranked[1].match_score


def test_affinity_is_neutral_without_metadata(interior_gap):
    spot = east_of_origin(250)
    with_artist = gap_suggestion_ranker.rank(
        interior_gap, [venue(30, spot, capacity=0)], TODAY, artist=ArtistProfile(id=42)
    )
    without = gap_suggestion_ranker.rank(interior_gap, [venue(30, spot, capacity=0)], TODAY)
    assert with_artist[0].match_score == without[0].match_score


def test_open_ended_gap_prefers_the_closer_venue(trailing_gap):
    candidates = [venue(31, east_of_origin(2000)), venue(30, east_of_origin(100))]

    ranked = gap_suggestion_ranker.rank(trailing_gap, candidates, TODAY)

    assert [s.candidate_venue_id for s in ranked] == [30, 31]
    assert ranked[0].travel_distance_to_next_km is None
    assert ranked[0].suggested_date == day(11)
    assert ranked[1].suggested_date == day(14)


def test_distance_only_weighting(interior_gap):
    ranker = GapSuggestionRanker(
        RoutingConfig(ranking=RankingParams(weight_slack=0, weight_affinity=0))
    )
    ranked = ranker.rank(interior_gap, [venue(10, east_of_origin(250))], TODAY)
    assert ranked[0].match_score == 100
