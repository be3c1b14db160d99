"""Custom exceptions for SoftPack"""

from typing import Optional


class SoftPackError(Exception):
    """Base exception for SoftPack"""
    pass


class ConfigError(SoftPackError):
    """Configuration error"""
    pass


class StorageError(SoftPackError):
    """Key-value storage could not be read or written"""
    pass


class ValidationError(SoftPackError):
    """User input failed validation. The message is safe to show to the user."""
    pass


class AuthenticationError(SoftPackError):
    """Login failed. The message never says whether the email or the password was wrong."""
    pass


class RegistrationError(SoftPackError):
    """Registration rejected by policy (e.g. the email is taken)"""
    pass


class RateLimitError(SoftPackError):
    """Too many attempts for one identifier inside the current window"""

    def __init__(self, message: str, action: Optional[str] = None):
        self.action = action
        super().__init__(message)


class PermissionDeniedError(SoftPackError):
    """A non-admin session reached an admin-only operation"""
    pass
