"""CSRF token helpers"""

import secrets


def generate_csrf_token() -> str:
    """64 hex characters from 32 random bytes"""
    return secrets.token_hex(32)


def verify_csrf_token(token: str, session_token: str) -> bool:
    if not token or not session_token:
        return False
    return secrets.compare_digest(token.encode("utf-8"), session_token.encode("utf-8"))
