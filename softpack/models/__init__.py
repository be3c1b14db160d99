from .user import Role, UserRecord, SessionUser
from .catalog import Game, Cheat, SiteSettings
from .security import ClientContext, SecurityLogEntry

__all__ = [
    "Role",
    "UserRecord",
    "SessionUser",
    "Game",
    "Cheat",
    "SiteSettings",
    "ClientContext",
    "SecurityLogEntry",
]
