"""
Bounded, persisted security audit log.

Every security-relevant action is recorded twice: once to a diagnostic sink
(structlog by default, swappable or silenceable) and once to a capped list in
the key-value store. Recording never raises to the caller.
"""

from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.security import ClientContext, SecurityLogEntry
from ..storage.keys import SECURITY_LOG_KEY
from ..storage.kv_store import KeyValueStore
from ..utils.exceptions import StorageError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ENTRIES = 100

Sink = Callable[[SecurityLogEntry], None]


def log_sink(entry: SecurityLogEntry) -> None:
    """Default diagnostic sink: one debug-level structured line per event"""
    logger.debug(
        "Security event",
        security_event=entry.event,
        details=entry.details,
        user_agent=entry.user_agent,
        url=entry.url,
    )


def null_sink(entry: SecurityLogEntry) -> None:
    pass


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SecurityLog:
    """Append-only audit trail capped at the most recent max_entries events"""

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = SECURITY_LOG_KEY,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        sink: Optional[Sink] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.storage = storage
        self.key = key
        self.max_entries = max_entries
        self.sink = sink or log_sink
        self.clock = clock
        self.lock = Lock()

    def record(
        self,
        event: str,
        details: Optional[Dict[str, Any]] = None,
        context: Optional[ClientContext] = None,
    ) -> None:
        """Record a security event; storage failures are only reported to the logger"""
        context = context or ClientContext()
        entry = SecurityLogEntry(
            timestamp=self.clock().isoformat(),
            event=event,
            details=dict(details or {}),
            user_agent=context.user_agent,
            url=context.url,
        )

        try:
            self.sink(entry)
        except Exception as e:
            logger.error("Security log sink failed", security_event=event, error=str(e))

        with self.lock:
            try:
                logs = self._load_raw()
                logs.append(entry.model_dump(mode="json", by_alias=True))
                if len(logs) > self.max_entries:
                    del logs[: len(logs) - self.max_entries]
                self.storage.set(self.key, logs)
            except Exception as e:
                logger.error("Failed to log security event", security_event=event, error=str(e))

    def entries(self, limit: Optional[int] = None) -> List[SecurityLogEntry]:
        """Persisted entries, oldest first; limit keeps only the newest ones"""
        with self.lock:
            raw = self._load_raw()
        result = []
        for item in raw:
            try:
                result.append(SecurityLogEntry(**item))
            except (PydanticValidationError, TypeError):
                continue
        if limit is not None:
            result = result[-limit:] if limit > 0 else []
        return result

    def _load_raw(self) -> List[Dict[str, Any]]:
        try:
            raw = self.storage.get(self.key)
        except StorageError as e:
            logger.warning("Security log unreadable, starting fresh", error=str(e))
            return []
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, dict)]
