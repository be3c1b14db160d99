"""Catalog data models: games, cheats and site settings"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Game(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = ""
    image: str = ""
    downloads: int = Field(default=0, ge=0)
    created_at: str = Field(alias="createdAt")


class Cheat(BaseModel):
    """A downloadable item belonging to one game"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    game_id: str = Field(alias="gameId")
    name: str
    description: str = ""
    url: str = ""
    image: str = ""
    downloads: int = Field(default=0, ge=0)
    created_at: str = Field(alias="createdAt")
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> List[str]:
        # Older rows may lack tags or carry garbage there
        if not isinstance(value, list):
            return []
        return [str(tag) for tag in value]


class SiteSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    homepage_video_url: Optional[str] = Field(default=None, alias="homepageVideoUrl")
