"""
Catalog storage: games, cheats and site settings.

Each table is held in memory and written through to the key-value store on
every change. No authorization happens here; callers gate admin mutations.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..models.catalog import Cheat, Game, SiteSettings
from ..storage.keys import CHEATS_KEY, GAMES_KEY, SETTINGS_KEY
from ..storage.kv_store import KeyValueStore
from ..utils.exceptions import StorageError
from ..utils.ids import new_id
from ..utils.logger import get_logger
from .seed_data import DEFAULT_CHEATS, DEFAULT_GAMES

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class CatalogStore:
    """CRUD over games and cheats plus the site settings record"""

    def __init__(self, storage: KeyValueStore):
        self.storage = storage
        self._games: List[Game] = self._load_table(GAMES_KEY, Game, DEFAULT_GAMES)
        self._cheats: List[Cheat] = self._load_table(CHEATS_KEY, Cheat, DEFAULT_CHEATS)
        self._settings: SiteSettings = self._load_settings()

    # Reads

    @property
    def games(self) -> List[Game]:
        return list(self._games)

    @property
    def cheats(self) -> List[Cheat]:
        return list(self._cheats)

    @property
    def settings(self) -> SiteSettings:
        return self._settings

    def get_game(self, game_id: str) -> Optional[Game]:
        return next((g for g in self._games if g.id == game_id), None)

    def get_cheat(self, cheat_id: str) -> Optional[Cheat]:
        return next((c for c in self._cheats if c.id == cheat_id), None)

    def cheats_for_game(self, game_id: str) -> List[Cheat]:
        return [c for c in self._cheats if c.game_id == game_id]

    # Wholesale replacement

    def set_games(self, games: List[Game]) -> None:
        self._games = list(games)
        self._write(GAMES_KEY, self._games)

    def set_cheats(self, cheats: List[Cheat]) -> None:
        self._cheats = list(cheats)
        self._write(CHEATS_KEY, self._cheats)

    def set_settings(self, settings: SiteSettings) -> None:
        self._settings = settings
        self.storage.set(SETTINGS_KEY, settings.model_dump(by_alias=True, exclude_none=True))

    def update_settings(self, partial: Optional[Dict[str, Any]] = None, **changes: Any) -> SiteSettings:
        """Merge changes into the current settings instead of replacing them"""
        merged = {**self._settings.model_dump(), **(partial or {}), **changes}
        self.set_settings(SiteSettings(**merged))
        return self._settings

    # Games

    def add_game(self, name: str, description: str = "", image: str = "") -> Game:
        game = Game(
            id=new_id(),
            name=name,
            description=description,
            image=image,
            downloads=0,
            created_at=_today(),
        )
        self.set_games(self._games + [game])
        logger.info("Game added", game_id=game.id)
        return game

    def update_game(self, game_id: str, **changes: Any) -> Optional[Game]:
        """Merge changes into one game; returns None when it does not exist"""
        updated = self._replace(self._games, game_id, Game, changes)
        if updated is None:
            return None
        self._games, game = updated
        self._write(GAMES_KEY, self._games)
        return game

    def delete_game(self, game_id: str) -> None:
        """Delete a game together with every cheat that references it"""
        games = [g for g in self._games if g.id != game_id]
        cheats = [c for c in self._cheats if c.game_id != game_id]
        removed = len(self._cheats) - len(cheats)
        self.set_games(games)
        self.set_cheats(cheats)
        logger.info("Game deleted", game_id=game_id, cheats_removed=removed)

    # Cheats

    def add_cheat(
        self,
        game_id: str,
        name: str,
        description: str = "",
        url: str = "",
        image: str = "",
        tags: Optional[List[str]] = None,
    ) -> Cheat:
        # game_id is stored as given; it may point at a game added later
        cheat = Cheat(
            id=new_id(),
            game_id=game_id,
            name=name,
            description=description,
            url=url,
            image=image,
            downloads=0,
            created_at=_today(),
            tags=list(tags or []),
        )
        self.set_cheats(self._cheats + [cheat])
        logger.info("Cheat added", cheat_id=cheat.id, game_id=game_id)
        return cheat

    def update_cheat(self, cheat_id: str, **changes: Any) -> Optional[Cheat]:
        updated = self._replace(self._cheats, cheat_id, Cheat, changes)
        if updated is None:
            return None
        self._cheats, cheat = updated
        self._write(CHEATS_KEY, self._cheats)
        return cheat

    def delete_cheat(self, cheat_id: str) -> None:
        self.set_cheats([c for c in self._cheats if c.id != cheat_id])

    def increment_download(self, cheat_id: str) -> Optional[Cheat]:
        """Add one download to the matching cheat; unknown ids change nothing"""
        cheat = self.get_cheat(cheat_id)
        if cheat is None:
            return None
        return self.update_cheat(cheat_id, downloads=cheat.downloads + 1)

    # Persistence helpers

    @staticmethod
    def _replace(records: List[T], record_id: str, model: Type[T], changes: Dict[str, Any]):
        changes = {k: v for k, v in changes.items() if k != "id"}
        for i, record in enumerate(records):
            if record.id == record_id:
                merged = model(**{**record.model_dump(), **changes})
                updated = list(records)
                updated[i] = merged
                return updated, merged
        return None

    def _write(self, key: str, records: List[BaseModel]) -> None:
        self.storage.set(key, [r.model_dump(by_alias=True) for r in records])

    def _load_table(self, key: str, model: Type[T], default: List[Dict[str, Any]]) -> List[T]:
        try:
            raw = self.storage.get(key)
        except StorageError as e:
            logger.warning("Failed to load catalog table, using defaults", key=key, error=str(e))
            raw = None
        if not isinstance(raw, list):
            raw = default

        records = []
        for item in raw:
            try:
                records.append(model(**item))
            except (PydanticValidationError, TypeError) as e:
                logger.warning("Skipping invalid catalog row", key=key, error=str(e))
        return records

    def _load_settings(self) -> SiteSettings:
        try:
            raw = self.storage.get(SETTINGS_KEY)
            if isinstance(raw, dict):
                return SiteSettings(**raw)
        except (StorageError, PydanticValidationError) as e:
            logger.warning("Failed to load site settings, using defaults", error=str(e))
        return SiteSettings()
