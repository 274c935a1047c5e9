# pytest tests/test_cli.py -q

import json

import pytest

from crime_route_ranking.main import main


@pytest.fixture
def feed_files(tmp_path, osrm_response):
    incidents = tmp_path / "incidents.json"
    incidents.write_text(json.dumps({"points": [
        {"type": "ROBBERY", "lat": 41.8812, "lng": -87.6278, "rawDate": "2021-02-10T23:15:00"},
        {"type": "ASSAULT", "lat": 41.8800, "lng": -87.6300, "rawDate": "2021-02-02T01:40:00"},
    ]}))
    routes = tmp_path / "routes.json"
    routes.write_text(json.dumps(osrm_response))
    return str(incidents), str(routes)


def test_cli_ranks_routes(feed_files, capsys):
    incidents, routes = feed_files

    assert main(["--incidents", incidents, "--routes", routes]) == 0

    out = capsys.readouterr().out
    assert "Route 1 [SAFEST] (source #1)" in out
    assert "Recommendation: source route #1" in out


def test_cli_date_window_and_categories(feed_files, capsys):
    incidents, routes = feed_files

    code = main(["--incidents", incidents, "--routes", routes,
                 "--start", "2021-02-05", "--category", "ROBBERY", "--method", "indexed"])

    assert code == 0
    assert "Date window: 2021-02-05 to 2021-02-10 (1 incidents)" in capsys.readouterr().out


def test_cli_missing_file(tmp_path, capsys):
    assert main(["--incidents", str(tmp_path / "nope.json"), "--routes", str(tmp_path / "r.json")]) == 1
    assert "not found" in capsys.readouterr().out


def test_cli_inverted_window(feed_files, capsys):
    incidents, routes = feed_files
    assert main(["--incidents", incidents, "--routes", routes,
                 "--start", "2021-03-01", "--end", "2021-01-01"]) == 1
