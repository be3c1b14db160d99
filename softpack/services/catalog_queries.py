"""Filtering and download analytics over catalog lists"""

from typing import Any, Dict, Iterable, List, Optional

from ..models.catalog import Cheat, Game


def filter_cheats(
    cheats: Iterable[Cheat],
    game_id: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    query: Optional[str] = None,
) -> List[Cheat]:
    """
    Narrow a cheat list.

    - game_id: exact owning game
    - tags: cheat must carry at least one of them
    - query: case-insensitive substring of the cheat name
    """
    wanted_tags = set(tags or [])
    needle = (query or "").lower()
    result = []
    for cheat in cheats:
        if game_id and cheat.game_id != game_id:
            continue
        if wanted_tags and not wanted_tags.intersection(cheat.tags):
            continue
        if needle and needle not in cheat.name.lower():
            continue
        result.append(cheat)
    return result


def all_tags(cheats: Iterable[Cheat]) -> List[str]:
    """Distinct tags in first-seen order"""
    seen: Dict[str, None] = {}
    for cheat in cheats:
        for tag in cheat.tags:
            seen.setdefault(tag, None)
    return list(seen)


def game_downloads(cheats: Iterable[Cheat], game_id: str) -> int:
    return sum(c.downloads for c in cheats if c.game_id == game_id)


def build_dashboard(games: List[Game], cheats: List[Cheat], top: int = 10) -> Dict[str, Any]:
    total_downloads = sum(c.downloads for c in cheats)
    names = {g.id: g.name for g in games}

    game_rows = [
        {
            "id": g.id,
            "name": g.name,
            "cheats_count": sum(1 for c in cheats if c.game_id == g.id),
            "total_downloads": game_downloads(cheats, g.id),
        }
        for g in games
    ]
    game_rows.sort(key=lambda row: row["total_downloads"], reverse=True)

    cheat_rows = [
        {
            "id": c.id,
            "name": c.name,
            "game": names.get(c.game_id, "Unknown"),
            "downloads": c.downloads,
            "created_at": c.created_at,
        }
        for c in sorted(cheats, key=lambda c: c.downloads, reverse=True)
    ]

    return {
        "total_downloads": total_downloads,
        "total_games": len(games),
        "total_cheats": len(cheats),
        "average_downloads": round(total_downloads / len(cheats)) if cheats else 0,
        "top_games": game_rows[:top],
        "top_cheats": cheat_rows[:top],
    }
