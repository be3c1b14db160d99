"""Security audit log models"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientContext(BaseModel):
    """Ambient client details attached to every security event"""
    user_agent: Optional[str] = None
    url: Optional[str] = None


class SecurityLogEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: str  # ISO format timestamp (UTC)
    event: str
    details: Dict[str, Any] = Field(default_factory=dict)
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    url: Optional[str] = None
