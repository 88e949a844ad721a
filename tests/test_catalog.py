"""
Tests for the file-backed, fixture and HTTP catalogs
"""
import json
from unittest.mock import MagicMock

import pytest
import requests

from conftest import make_ball
from nextball.catalog import FileCatalog, FixtureCatalog, HttpCatalog, build_catalog, summarize_matches
from nextball.exceptions import FetchFailed, MatchDataUnreadable, MatchNotFound, SeasonNotFound


@pytest.fixture
def data_dir(tmp_path):
    """A small data tree in the three file formats the service has seen."""
    season_2008 = tmp_path / "2008"
    season_2008.mkdir()
    (season_2008 / "335982.json").write_text(json.dumps([
        make_ball(batting_team="Kolkata Knight Riders", bowling_team="Royal Challengers Bangalore"),
    ]))
    (season_2008 / "335983.json").write_text(json.dumps({"match": "CSK vs PBKS"}))
    (season_2008 / "335984.json").write_text("{not json")
    (season_2008 / "notes.txt").write_text("ignored")

    season_2023 = tmp_path / "2023"
    season_2023.mkdir()
    (season_2023 / "1370353.json").write_text(json.dumps({
        "info": {"teams": ["Gujarat Titans", "Chennai Super Kings"]},
        "innings": [],
    }))

    (tmp_path / "README.md").write_text("not a season")
    return tmp_path


class TestFileCatalog:
    def test_seasons_are_directories_newest_first(self, data_dir):
        assert FileCatalog(data_dir).list_seasons() == ["2023", "2008"]

    def test_match_labels_from_file_contents(self, data_dir):
        matches = {m["match_id"]: m for m in FileCatalog(data_dir).list_matches("2008")}

        assert set(matches) == {"335982", "335983", "335984"}
        assert matches["335982"]["match"] == \
            "Kolkata Knight Riders vs Royal Challengers Bangalore (335982)"
        assert matches["335983"]["match"] == "CSK vs PBKS (335983)"
        # Unparseable files keep the fallback description
        assert matches["335984"]["description"] == "Match 335984 (Season 2008)"
        assert matches["335984"]["match"] == "Match 335984 (Season 2008)"

    def test_cricsheet_info_teams_label(self, data_dir):
        matches = FileCatalog(data_dir).list_matches("2023")
        assert matches[0]["match"] == "Gujarat Titans vs Chennai Super Kings (1370353)"

    def test_unknown_season(self, data_dir):
        with pytest.raises(SeasonNotFound):
            FileCatalog(data_dir).list_matches("1999")

    def test_match_data_returned_as_stored(self, data_dir):
        data = FileCatalog(data_dir).get_match_data("2008", "335982")
        assert isinstance(data, list)
        assert data[0]["batting_team"] == "Kolkata Knight Riders"

    def test_missing_match(self, data_dir):
        with pytest.raises(MatchNotFound):
            FileCatalog(data_dir).get_match_data("2008", "1")

    def test_unparseable_match(self, data_dir):
        with pytest.raises(MatchDataUnreadable):
            FileCatalog(data_dir).get_match_data("2008", "335984")

    @pytest.mark.parametrize("season,match_id", [("..", "2008"), ("2008", "../2023/1370353")])
    def test_path_traversal_is_not_found(self, data_dir, season, match_id):
        with pytest.raises(MatchNotFound):
            FileCatalog(data_dir).get_match_data(season, match_id)


class TestFixtureCatalog:
    def test_sample_seasons(self, sample_catalog):
        assert sample_catalog.list_seasons() == ["2023", "2008"]

    def test_sample_matches(self, sample_catalog):
        matches = sample_catalog.list_matches("2008")
        assert matches[0]["match_id"] == "335982"
        assert matches[0]["description"] == "RCB vs KKR - 2008 Match 1"

    def test_match_data_is_a_copy(self, sample_catalog):
        data = sample_catalog.get_match_data("2008", "335982")
        data["innings"].clear()
        assert sample_catalog.get_match_data("2008", "335982")["innings"]

    def test_injected_dataset(self):
        catalog = FixtureCatalog({"2010": [{"match_id": 7, "innings": []}]})
        assert catalog.list_seasons() == ["2010"]
        assert catalog.list_matches("2010")[0]["description"] == "Match 7 (Season 2010)"

    def test_unknown_match(self, sample_catalog):
        with pytest.raises(MatchNotFound):
            sample_catalog.get_match_data("2008", "999")

    def test_unknown_season(self, sample_catalog):
        with pytest.raises(SeasonNotFound):
            sample_catalog.list_matches("1990")


class TestSummarizeMatches:
    """Match listings of any shape become descriptors"""

    def test_flat_deliveries_grouped_by_match(self):
        listing = [
            make_ball(match_id=1), make_ball(match_id=1, ball=2), make_ball(match_id=2),
        ]
        summaries = summarize_matches(listing, "2008")
        assert [s["match_id"] for s in summaries] == ["1", "2"]
        assert summaries[0]["match"] == "Mumbai Indians vs Chennai Super Kings (1)"

    def test_array_of_arrays(self):
        listing = [[make_ball(match_id=5)], [make_ball(match_id=6)]]
        assert [s["match_id"] for s in summarize_matches(listing)] == ["5", "6"]

    def test_descriptors_pass_through(self):
        listing = [{"match_id": 9, "description": "Final", "match": "A vs B (9)"}]
        assert summarize_matches(listing) == [
            {"match_id": "9", "description": "Final", "match": "A vs B (9)"}
        ]

    def test_empty_or_invalid(self):
        assert summarize_matches([]) == []
        assert summarize_matches({"error": "x"}) == []


def _response(status_code, body):
    resp = MagicMock()
    resp.status_code = status_code
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


class TestHttpCatalog:
    """The HTTP client returns parsed JSON or raises FetchFailed"""

    def test_seasons(self):
        session = MagicMock()
        session.get.return_value = _response(200, ["2023", "2008"])
        catalog = HttpCatalog("http://catalog.test/", session=session)

        assert catalog.list_seasons() == ["2023", "2008"]
        url = session.get.call_args[0][0]
        assert url == "http://catalog.test/api/seasons"

    def test_match_data(self):
        session = MagicMock()
        session.get.return_value = _response(200, [make_ball()])
        catalog = HttpCatalog("http://catalog.test", session=session)

        assert catalog.get_match_data("2008", "335982")[0]["batter"] == "RG Sharma"
        assert session.get.call_args[0][0] == "http://catalog.test/api/data/2008/335982"

    def test_error_body_becomes_message(self):
        session = MagicMock()
        session.get.return_value = _response(404, {"error": "Season not found"})
        catalog = HttpCatalog("http://catalog.test", session=session)

        with pytest.raises(FetchFailed) as exc_info:
            catalog.list_matches("1999")
        assert exc_info.value.status == 404
        assert exc_info.value.message == "Season not found"

    def test_network_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        catalog = HttpCatalog("http://catalog.test", session=session)

        with pytest.raises(FetchFailed) as exc_info:
            catalog.list_seasons()
        assert exc_info.value.status is None

    def test_invalid_json(self):
        session = MagicMock()
        session.get.return_value = _response(200, ValueError("bad json"))
        catalog = HttpCatalog("http://catalog.test", session=session)

        with pytest.raises(FetchFailed):
            catalog.get_match_data("2008", "1")


class TestBuildCatalog:
    def test_sources(self, tmp_path):
        assert isinstance(build_catalog("fixtures"), FixtureCatalog)
        assert isinstance(build_catalog("files", data_dir=str(tmp_path)), FileCatalog)
        assert isinstance(build_catalog("http", url="http://catalog.test"), HttpCatalog)

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            build_catalog("ftp")
