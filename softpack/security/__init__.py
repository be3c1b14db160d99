from .hasher import PasswordHasher, hash_password, verify_password
from .validators import (
    ValidationResult,
    sanitize_html,
    validate_email,
    validate_name,
    validate_password,
    validate_url,
    validate_video_url,
)
from .audit_log import SecurityLog
from .tokens import generate_csrf_token, verify_csrf_token

__all__ = [
    "PasswordHasher",
    "hash_password",
    "verify_password",
    "ValidationResult",
    "sanitize_html",
    "validate_email",
    "validate_name",
    "validate_password",
    "validate_url",
    "validate_video_url",
    "SecurityLog",
    "generate_csrf_token",
    "verify_csrf_token",
]
