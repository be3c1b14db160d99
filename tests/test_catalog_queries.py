"""Tests for cheat filtering and download analytics"""

from softpack.models.catalog import Cheat
from softpack.services.catalog_queries import (
    all_tags,
    build_dashboard,
    filter_cheats,
    game_downloads,
)


def _ids(cheats):
    return [c.id for c in cheats]


def test_filter_by_game(catalog):
    assert _ids(filter_cheats(catalog.cheats, game_id="1")) == ["1", "2"]


def test_filter_by_any_tag(catalog):
    assert _ids(filter_cheats(catalog.cheats, tags=["visual"])) == ["2", "3"]
    assert _ids(filter_cheats(catalog.cheats, tags=["legit", "money"])) == ["1", "4"]


def test_filter_by_name_query_ignores_case(catalog):
    assert _ids(filter_cheats(catalog.cheats, query="HACK")) == ["2", "4"]


def test_filters_combine(catalog):
    assert _ids(filter_cheats(catalog.cheats, game_id="1", tags=["visual"], query="wall")) == ["2"]
    assert filter_cheats(catalog.cheats, game_id="2", query="aim") == []


def test_empty_filters_keep_everything(catalog):
    assert len(filter_cheats(catalog.cheats, game_id="", tags=[], query="")) == 4


def test_all_tags_first_seen_order(catalog):
    assert all_tags(catalog.cheats) == ["aimbot", "legit", "wallhack", "visual", "esp", "money", "economy"]


def test_game_downloads(catalog):
    assert game_downloads(catalog.cheats, "1") == 770
    assert game_downloads(catalog.cheats, "nope") == 0


def test_dashboard(catalog):
    stats = build_dashboard(catalog.games, catalog.cheats)

    assert stats["total_downloads"] == 1940
    assert stats["total_games"] == 3
    assert stats["total_cheats"] == 4
    assert stats["average_downloads"] == 485
    assert [g["name"] for g in stats["top_games"]] == ["GTA V", "CS:GO", "Valorant"]
    assert stats["top_games"][1]["cheats_count"] == 2
    assert stats["top_cheats"][0] == {
        "id": "4",
        "name": "Money Hack",
        "game": "GTA V",
        "downloads": 890,
        "created_at": "2024-01-11",
    }


def test_dashboard_handles_orphans_and_empty_tables(catalog):
    orphan = Cheat(id="x", game_id="gone", name="Orphan", downloads=5000, created_at="2024-03-01")
    stats = build_dashboard(catalog.games, catalog.cheats + [orphan], top=1)
    assert stats["top_cheats"] == [
        {"id": "x", "name": "Orphan", "game": "Unknown", "downloads": 5000, "created_at": "2024-03-01"}
    ]
    assert len(stats["top_games"]) == 1

    empty = build_dashboard([], [])
    assert empty["average_downloads"] == 0
    assert empty["top_games"] == [] and empty["top_cheats"] == []
