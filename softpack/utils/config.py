"""
Configuration management with schema validation.
Single source of truth for SoftPack settings.
"""

import os
from pathlib import Path
from typing import Any, List, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .exceptions import ConfigError
from .logger import get_logger

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

CONFIG_DIR = Path("config")
SETTINGS_FILE = CONFIG_DIR / "settings.yaml"


class AppSettings(BaseModel):
    name: str = "SoftPack"
    version: str = "1.0.0"
    environment: str = "production"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"
    file_path: Optional[str] = "logs/softpack.log"
    max_bytes: int = 10485760
    backup_count: int = 5


class StorageSettings(BaseModel):
    backend: Literal["file", "memory"] = "file"
    data_dir: str = "data"


class SecuritySettings(BaseModel):
    pbkdf2_iterations: int = Field(default=10000, ge=10000)
    login_max_attempts: int = Field(default=5, ge=1)
    login_window_seconds: float = Field(default=300, gt=0)
    register_max_attempts: int = Field(default=3, ge=1)
    register_window_seconds: float = Field(default=600, gt=0)
    security_log_max_entries: int = Field(default=100, ge=1)
    # Bootstrap-only: the one identity granted "admin" on registration
    seed_admin_name: str = "gademoff"
    seed_admin_email: str = "gademoff@admin.com"


class WebSettings(BaseModel):
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    profile_cookie_name: str = "softpack_profile"
    cookie_secure: bool = False


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    web: WebSettings = Field(default_factory=WebSettings)


class ConfigManager:
    """Loads settings.yaml, expanding ${VAR} and ${VAR:default} from the environment"""

    def __init__(self, settings_path: Optional[Path] = None):
        env_path = os.getenv("SOFTPACK_SETTINGS")
        if settings_path is not None:
            self.settings_path = Path(settings_path)
        elif env_path:
            self.settings_path = Path(env_path)
        else:
            self.settings_path = SETTINGS_FILE
        self._settings: Optional[Settings] = None

    def _substitute_env_vars(self, value: Any) -> Any:
        """Recursively substitute environment variables"""
        if isinstance(value, str):
            if value.startswith("${") and value.endswith("}"):
                var_expr = value[2:-1]
                if ":" in var_expr:
                    var_name, default = var_expr.split(":", 1)
                    return os.getenv(var_name.strip(), default.strip())
                else:
                    return os.getenv(var_expr, value)
        elif isinstance(value, dict):
            return {k: self._substitute_env_vars(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [self._substitute_env_vars(item) for item in value]
        return value

    def load_settings(self) -> Settings:
        """Load and validate settings.yaml; a missing file yields the defaults"""
        if not self.settings_path.exists():
            logger.info("Settings file not found, using defaults", path=str(self.settings_path))
            self._settings = Settings()
            return self._settings

        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                raw_data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError(f"Failed to read settings from {self.settings_path}: {str(e)}")

        if not isinstance(raw_data, dict):
            raise ConfigError(f"Settings file {self.settings_path} must contain a mapping")

        processed_data = self._substitute_env_vars(raw_data)
        try:
            self._settings = Settings(**processed_data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid settings in {self.settings_path}: {str(e)}")
        return self._settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            return self.load_settings()
        return self._settings
