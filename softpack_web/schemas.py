"""Request and response bodies for the web surface"""

from typing import List, Optional

from pydantic import BaseModel, Field

from softpack.models.user import SessionUser


class MeResponse(BaseModel):
    user: Optional[SessionUser] = None
    is_loading: bool = False


class UserResponse(BaseModel):
    user: SessionUser


class GamePayload(BaseModel):
    name: str
    description: str = ""
    image: str = ""


class CheatPayload(BaseModel):
    game_id: str
    name: str
    description: str = ""
    url: str = ""
    image: str = ""
    tags: List[str] = Field(default_factory=list)


class SettingsPayload(BaseModel):
    homepage_video_url: str = ""
