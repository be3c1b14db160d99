"""
Public catalog routes.

Prefix: /api
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from softpack.app import SoftPackApp
from softpack.models.catalog import Cheat, Game, SiteSettings
from softpack.services.catalog_queries import all_tags, filter_cheats

from .deps import get_core


router = APIRouter(prefix="/api", tags=["catalog"])


def _not_found(kind: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind} not found")


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/games", response_model=List[Game])
async def list_games(core: SoftPackApp = Depends(get_core)) -> List[Game]:
    return core.catalog.games


@router.get("/games/{game_id}", response_model=Game)
async def get_game(game_id: str, core: SoftPackApp = Depends(get_core)) -> Game:
    game = core.catalog.get_game(game_id)
    if game is None:
        raise _not_found("Game")
    return game


@router.get("/games/{game_id}/cheats", response_model=List[Cheat])
async def list_game_cheats(game_id: str, core: SoftPackApp = Depends(get_core)) -> List[Cheat]:
    return core.catalog.cheats_for_game(game_id)


@router.get("/cheats", response_model=List[Cheat])
async def list_cheats(
    game_id: Optional[str] = None,
    tag: List[str] = Query(default=[]),
    q: Optional[str] = None,
    core: SoftPackApp = Depends(get_core),
) -> List[Cheat]:
    """Cheats filtered by owning game, any of the given tags and a name substring"""
    return filter_cheats(core.catalog.cheats, game_id=game_id, tags=tag, query=q)


@router.get("/cheats/{cheat_id}", response_model=Cheat)
async def get_cheat(cheat_id: str, core: SoftPackApp = Depends(get_core)) -> Cheat:
    cheat = core.catalog.get_cheat(cheat_id)
    if cheat is None:
        raise _not_found("Cheat")
    return cheat


@router.post("/cheats/{cheat_id}/download", response_model=Cheat)
async def download_cheat(cheat_id: str, core: SoftPackApp = Depends(get_core)) -> Cheat:
    """Count a download and return the cheat (its url is the download link)"""
    cheat = core.catalog.increment_download(cheat_id)
    if cheat is None:
        raise _not_found("Cheat")
    return cheat


@router.get("/tags", response_model=List[str])
async def list_tags(core: SoftPackApp = Depends(get_core)) -> List[str]:
    return all_tags(core.catalog.cheats)


@router.get("/settings", response_model=SiteSettings)
async def get_settings(core: SoftPackApp = Depends(get_core)) -> SiteSettings:
    return core.catalog.settings
