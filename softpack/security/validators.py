"""
Input validation and HTML escaping.

All functions are pure. sanitize_html is a denylist escaper for a fixed set of
characters, not a context-aware output encoder.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

EMAIL_MAX_LENGTH = 254
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_NAME_RE = re.compile(r"[a-zA-Zа-яА-Я0-9\s\-_]+")
_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")

_VIDEO_URL_PATTERNS = [
    re.compile(r"^https?://(www\.)?youtube\.com/watch\?v=[\w-]+", re.ASCII),
    re.compile(r"^https?://youtu\.be/[\w-]+", re.ASCII),
    re.compile(r"^https?://(www\.)?youtube\.com/embed/[\w-]+", re.ASCII),
    re.compile(r"^https?://(www\.)?youtube\.com/shorts/[\w-]+", re.ASCII),
]

# Ampersand must stay first so later entities are not escaped twice
_HTML_ESCAPES = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("/", "&#x2F;"),
]


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: Optional[str] = None


def validate_email(email: str) -> bool:
    """local@domain.tld shape, at most 254 characters"""
    return bool(_EMAIL_RE.fullmatch(email)) and len(email) <= EMAIL_MAX_LENGTH


def validate_password(password: str) -> ValidationResult:
    if len(password) < PASSWORD_MIN_LENGTH:
        return ValidationResult(False, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(password) > PASSWORD_MAX_LENGTH:
        return ValidationResult(False, "Password is too long")
    if not (_LOWER_RE.search(password) and _UPPER_RE.search(password) and _DIGIT_RE.search(password)):
        return ValidationResult(False, "Password must contain uppercase letters, lowercase letters and digits")
    return ValidationResult(True)


def validate_name(name: str) -> ValidationResult:
    if len(name) < NAME_MIN_LENGTH:
        return ValidationResult(False, f"Name must be at least {NAME_MIN_LENGTH} characters long")
    if len(name) > NAME_MAX_LENGTH:
        return ValidationResult(False, "Name is too long")
    if not _NAME_RE.fullmatch(name):
        return ValidationResult(False, "Name contains invalid characters")
    return ValidationResult(True)


def validate_url(url: str) -> bool:
    """Absolute http(s) URL with a host"""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_video_url(url: str) -> bool:
    """YouTube watch, short-link, embed or shorts URL"""
    return any(pattern.match(url) for pattern in _VIDEO_URL_PATTERNS)


def sanitize_html(text: str) -> str:
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text
