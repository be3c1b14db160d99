"""
Admin routes. Every call goes through AdminService, which rejects and logs
non-admin sessions. Mutations also require the profile's CSRF token.

Prefix: /admin
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from softpack.app import SoftPackApp
from softpack.models.catalog import Cheat, Game, SiteSettings
from softpack.models.security import ClientContext, SecurityLogEntry
from softpack.models.user import SessionUser

from .deps import get_client_context, get_core, get_current_user, require_csrf
from .schemas import CheatPayload, GamePayload, SettingsPayload


router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard")
async def dashboard(
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> Dict[str, Any]:
    return core.admin.dashboard(user, context=context)


@router.post(
    "/games",
    response_model=Game,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf)],
)
async def create_game(
    payload: GamePayload,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> Game:
    return core.admin.save_game(user, payload.name, payload.description, payload.image, context=context)


@router.put("/games/{game_id}", response_model=Game, dependencies=[Depends(require_csrf)])
async def update_game(
    game_id: str,
    payload: GamePayload,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> Game:
    game = core.admin.save_game(
        user, payload.name, payload.description, payload.image, game_id=game_id, context=context
    )
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return game


@router.delete("/games/{game_id}", dependencies=[Depends(require_csrf)])
async def delete_game(
    game_id: str,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> Dict[str, str]:
    core.admin.delete_game(user, game_id, context=context)
    return {"status": "success"}


@router.post(
    "/cheats",
    response_model=Cheat,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf)],
)
async def create_cheat(
    payload: CheatPayload,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> Cheat:
    return core.admin.save_cheat(user, **payload.model_dump(), context=context)


@router.put("/cheats/{cheat_id}", response_model=Cheat, dependencies=[Depends(require_csrf)])
async def update_cheat(
    cheat_id: str,
    payload: CheatPayload,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> Cheat:
    cheat = core.admin.save_cheat(user, **payload.model_dump(), cheat_id=cheat_id, context=context)
    if cheat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cheat not found")
    return cheat


@router.delete("/cheats/{cheat_id}", dependencies=[Depends(require_csrf)])
async def delete_cheat(
    cheat_id: str,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> Dict[str, str]:
    core.admin.delete_cheat(user, cheat_id, context=context)
    return {"status": "success"}


@router.put("/settings", response_model=SiteSettings, dependencies=[Depends(require_csrf)])
async def update_settings(
    payload: SettingsPayload,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> SiteSettings:
    return core.admin.set_homepage_video(user, payload.homepage_video_url, context=context)


@router.get("/security-log", response_model=List[SecurityLogEntry])
async def security_log(
    limit: int = 100,
    core: SoftPackApp = Depends(get_core),
    user: Optional[SessionUser] = Depends(get_current_user),
    context: ClientContext = Depends(get_client_context),
) -> List[SecurityLogEntry]:
    return core.admin.security_events(user, limit=limit, context=context)
