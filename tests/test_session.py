# pytest tests/test_session.py -q

from datetime import datetime

import pytest

from crime_route_ranking.data import IncidentCategory, parse_route_candidates
from crime_route_ranking.exceptions import InvalidSelectionError
from crime_route_ranking.session import NO_ROUTES_MESSAGE, RankingSession

from conftest import make_incident


@pytest.fixture
def session(downtown_incidents):
    return RankingSession(downtown_incidents)


@pytest.fixture
def candidates(osrm_response):
    return parse_route_candidates(osrm_response)


def test_initial_state(session, downtown_incidents):
    assert len(session.active_incidents) == len(downtown_incidents)
    assert session.date_window == session.available_window
    assert IncidentCategory.OTHER not in session.active_categories
    assert session.selection.is_empty


def test_visible_incidents_follow_category_filter(session):
    # CRIMINAL_DAMAGE maps to OTHER, which starts disabled
    assert len(session.visible_incidents()) == 7

    session.toggle_category("THEFT", False)
    assert len(session.visible_incidents()) == 5

    session.toggle_category(IncidentCategory.OTHER, True)
    assert len(session.visible_incidents()) == 6


def test_empty_filter_shows_nothing_and_scores_zero(session, candidates):
    session.set_categories([])

    assert session.visible_incidents() == []
    outcome = session.rank_routes(candidates)
    assert all(r.score == 0.0 for r in outcome.ranked)
    assert [r.source_index for r in outcome.ranked] == [0, 1, 2]


def test_rank_routes_selects_safest(session, candidates):
    outcome = session.rank_routes(candidates)

    assert outcome.has_result
    assert outcome.message == "Found 3 routes"
    assert outcome.selected_index == 0
    assert outcome.ranked[0].source_index == 1
    assert outcome.analysis['recommendation']['recommended_route'] == 1


def test_rank_without_candidates(session):
    outcome = session.rank_routes([])

    assert not outcome.has_result
    assert outcome.message == NO_ROUTES_MESSAGE
    assert session.selection.is_empty


def test_select_and_clear(session, candidates):
    session.rank_routes(candidates)

    route = session.select_route(2)
    assert route.rank == 2
    assert session.selection.selected_index == 2

    with pytest.raises(InvalidSelectionError):
        session.select_route(5)
    assert session.selection.selected_index == 2

    session.clear_routes()
    assert session.ranked == []
    assert session.selection.is_empty


def test_rerank_resets_selection(session, candidates):
    session.rank_routes(candidates)
    session.select_route(1)
    session.toggle_category("ROBBERY", False)

    outcome = session.rank_routes(candidates)

    assert outcome.selected_index == 0


def test_date_window_changes_scores(session, candidates):
    full = session.rank_routes(candidates).ranked[-1].score

    session.apply_date_window(datetime(2021, 3, 1), datetime(2021, 3, 31))
    narrowed = session.rank_routes(candidates).ranked[-1].score

    assert narrowed < full

    session.reset_date_window()
    assert session.rank_routes(candidates).ranked[-1].score == pytest.approx(full)


def test_date_window_keeps_undated(session):
    session.apply_date_window(datetime(2022, 1, 1), datetime(2022, 12, 31))

    assert len(session.active_incidents) == 1
    assert session.active_incidents[0].timestamp is None


def test_invalid_date_window(session):
    before = session.date_window
    with pytest.raises(ValueError):
        session.apply_date_window(datetime(2021, 3, 1), datetime(2021, 1, 1))
    assert session.date_window == before


def test_session_without_incidents(candidates):
    session = RankingSession()

    assert session.available_window is None
    outcome = session.rank_routes(candidates)
    assert all(r.score == 0.0 for r in outcome.ranked)


def test_load_incidents_resets_window(session):
    session.apply_date_window(datetime(2021, 2, 1), datetime(2021, 2, 28))
    session.load_incidents([make_incident("THEFT", 41.88, -87.63, datetime(2023, 5, 1))])

    assert session.date_window.start == datetime(2023, 5, 1)
    assert len(session.active_incidents) == 1
