"""Application wiring: builds the shared services once per process"""

from typing import Optional

from .auth.auth_store import AuthStore
from .models.security import ClientContext
from .safety.rate_limiter import RateLimiter
from .security.audit_log import SecurityLog
from .security.hasher import PasswordHasher
from .services.admin_service import AdminService
from .services.catalog_store import CatalogStore
from .storage.keys import SESSION_KEY, session_key_for
from .storage.kv_store import KeyValueStore, create_store
from .utils.config import ConfigManager, Settings
from .utils.logger import get_logger, setup_logger

logger = get_logger(__name__)


class SoftPackApp:
    """Owns storage, hasher, rate limiter, security log, catalog and admin service"""

    def __init__(self, settings: Optional[Settings] = None, storage: Optional[KeyValueStore] = None):
        self.settings = settings
        self.storage = storage
        self.hasher: Optional[PasswordHasher] = None
        self.rate_limiter: Optional[RateLimiter] = None
        self.security_log: Optional[SecurityLog] = None
        self.catalog: Optional[CatalogStore] = None
        self.admin: Optional[AdminService] = None

    def initialize(self, configure_logging: bool = True) -> "SoftPackApp":
        """Load configuration (if not given) and build the services"""
        if self.settings is None:
            self.settings = ConfigManager().load_settings()

        if configure_logging:
            log_cfg = self.settings.logging
            setup_logger(
                log_level=log_cfg.level,
                log_format=log_cfg.format,
                file_path=log_cfg.file_path,
                max_bytes=log_cfg.max_bytes,
                backup_count=log_cfg.backup_count,
            )

        if self.storage is None:
            self.storage = create_store(self.settings.storage)

        security = self.settings.security
        self.hasher = PasswordHasher(iterations=security.pbkdf2_iterations)
        self.rate_limiter = RateLimiter()
        self.security_log = SecurityLog(self.storage, max_entries=security.security_log_max_entries)
        self.catalog = CatalogStore(self.storage)
        self.admin = AdminService(self.catalog, self.security_log)

        logger.info(
            "SoftPack initialized",
            app_name=self.settings.app.name,
            version=self.settings.app.version,
            environment=self.settings.app.environment,
            storage_backend=self.settings.storage.backend,
        )
        return self

    def auth_for(self, profile_id: Optional[str] = None, context: Optional[ClientContext] = None) -> AuthStore:
        """AuthStore bound to one client profile's session slot"""
        if self.catalog is None:
            raise RuntimeError("SoftPackApp.initialize() must be called first")
        return AuthStore(
            storage=self.storage,
            hasher=self.hasher,
            rate_limiter=self.rate_limiter,
            security_log=self.security_log,
            settings=self.settings.security,
            session_key=session_key_for(profile_id) if profile_id else SESSION_KEY,
            context=context,
        )
