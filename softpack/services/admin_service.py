"""
Admin operations over the catalog.

Every method checks that the acting session is an admin, sanitizes and
validates the submitted fields, and records a security event before touching
the catalog. Unauthorized attempts are recorded and rejected.
"""

from typing import Any, Dict, List, Optional

from ..models.catalog import Cheat, Game, SiteSettings
from ..models.security import ClientContext, SecurityLogEntry
from ..models.user import SessionUser
from ..security.audit_log import SecurityLog
from ..security.validators import sanitize_html, validate_url, validate_video_url
from ..utils.exceptions import PermissionDeniedError, ValidationError
from .catalog_queries import build_dashboard
from .catalog_store import CatalogStore

TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 100
MAX_TAGS = 10


def _clean_title(raw: str, kind: str) -> str:
    title = sanitize_html(raw.strip())
    if len(title) < TITLE_MIN_LENGTH:
        raise ValidationError(f"{kind} name must be at least {TITLE_MIN_LENGTH} characters long")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"{kind} name is too long")
    return title


def _clean_tags(tags: Optional[List[str]]) -> List[str]:
    cleaned: List[str] = []
    for tag in tags or []:
        value = sanitize_html(tag.strip())
        if value and value not in cleaned:
            cleaned.append(value)
    if len(cleaned) > MAX_TAGS:
        raise ValidationError(f"Too many tags (maximum {MAX_TAGS})")
    return cleaned


class AdminService:
    def __init__(self, catalog: CatalogStore, security_log: SecurityLog):
        self.catalog = catalog
        self.security_log = security_log

    def require_admin(
        self,
        actor: Optional[SessionUser],
        attempted_access: str = "admin_panel",
        context: Optional[ClientContext] = None,
    ) -> SessionUser:
        if actor is None or not actor.is_admin:
            self.security_log.record(
                "unauthorized_admin_access",
                {
                    "userId": actor.id if actor else None,
                    "userRole": actor.role if actor else None,
                    "attemptedAccess": attempted_access,
                },
                context,
            )
            raise PermissionDeniedError("Access denied. Administrator rights required.")
        return actor

    def save_game(
        self,
        actor: Optional[SessionUser],
        name: str,
        description: str = "",
        image: str = "",
        game_id: Optional[str] = None,
        context: Optional[ClientContext] = None,
    ) -> Optional[Game]:
        """Create a game, or update one when game_id is given"""
        admin = self.require_admin(actor, "game_editor", context)
        clean_name = _clean_title(name, "Game")
        clean_description = sanitize_html(description.strip())

        if game_id:
            self.security_log.record(
                "admin_game_update",
                {"adminId": admin.id, "gameId": game_id, "gameName": clean_name},
                context,
            )
            return self.catalog.update_game(
                game_id, name=clean_name, description=clean_description, image=image
            )

        self.security_log.record(
            "admin_game_create", {"adminId": admin.id, "gameName": clean_name}, context
        )
        return self.catalog.add_game(clean_name, clean_description, image)

    def save_cheat(
        self,
        actor: Optional[SessionUser],
        game_id: str,
        name: str,
        description: str = "",
        url: str = "",
        image: str = "",
        tags: Optional[List[str]] = None,
        cheat_id: Optional[str] = None,
        context: Optional[ClientContext] = None,
    ) -> Optional[Cheat]:
        """Create a cheat, or update one when cheat_id is given"""
        admin = self.require_admin(actor, "cheat_editor", context)
        clean_name = _clean_title(name, "Cheat")
        clean_description = sanitize_html(description.strip())
        clean_url = url.strip()
        if clean_url and not validate_url(clean_url):
            raise ValidationError("Invalid URL")
        clean_tags = _clean_tags(tags)

        fields = dict(
            game_id=game_id,
            name=clean_name,
            description=clean_description,
            url=clean_url,
            image=image,
            tags=clean_tags,
        )
        if cheat_id:
            self.security_log.record(
                "admin_cheat_update",
                {"adminId": admin.id, "cheatId": cheat_id, "cheatName": clean_name, "gameId": game_id},
                context,
            )
            return self.catalog.update_cheat(cheat_id, **fields)

        self.security_log.record(
            "admin_cheat_create",
            {"adminId": admin.id, "cheatName": clean_name, "gameId": game_id},
            context,
        )
        return self.catalog.add_cheat(**fields)

    def delete_game(self, actor: Optional[SessionUser], game_id: str, context: Optional[ClientContext] = None) -> None:
        admin = self.require_admin(actor, "game_editor", context)
        self.security_log.record("admin_game_delete", {"adminId": admin.id, "gameId": game_id}, context)
        self.catalog.delete_game(game_id)

    def delete_cheat(self, actor: Optional[SessionUser], cheat_id: str, context: Optional[ClientContext] = None) -> None:
        admin = self.require_admin(actor, "cheat_editor", context)
        self.security_log.record("admin_cheat_delete", {"adminId": admin.id, "cheatId": cheat_id}, context)
        self.catalog.delete_cheat(cheat_id)

    def set_homepage_video(
        self,
        actor: Optional[SessionUser],
        url: str,
        context: Optional[ClientContext] = None,
    ) -> SiteSettings:
        """Set or (with an empty url) clear the homepage video"""
        admin = self.require_admin(actor, "site_settings", context)
        clean_url = url.strip()
        if clean_url and not validate_video_url(clean_url):
            raise ValidationError("Invalid YouTube link")
        self.security_log.record(
            "admin_settings_update",
            {"adminId": admin.id, "homepageVideoUrl": clean_url or None},
            context,
        )
        return self.catalog.update_settings(homepage_video_url=clean_url or None)

    def dashboard(self, actor: Optional[SessionUser], context: Optional[ClientContext] = None) -> Dict[str, Any]:
        self.require_admin(actor, "analytics", context)
        return build_dashboard(self.catalog.games, self.catalog.cheats)

    def security_events(
        self,
        actor: Optional[SessionUser],
        limit: int = 100,
        context: Optional[ClientContext] = None,
    ) -> List[SecurityLogEntry]:
        self.require_admin(actor, "security_log", context)
        return self.security_log.entries(limit=limit)
