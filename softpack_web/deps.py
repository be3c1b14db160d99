"""
FastAPI dependencies: client profile, client context and per-profile auth.

A client profile is an opaque cookie value. It names the single session slot
the caller owns, the way one browser profile owns one session. The profile
also owns a CSRF token that state-changing admin calls must echo back in the
X-CSRF-Token header.
"""

import re
import secrets
from typing import Optional

from fastapi import Depends, Request, Response

from softpack.app import SoftPackApp
from softpack.auth.auth_store import AuthStore
from softpack.models.security import ClientContext
from softpack.models.user import SessionUser
from softpack.security.tokens import generate_csrf_token, verify_csrf_token
from softpack.storage.keys import csrf_key_for
from softpack.utils.exceptions import PermissionDeniedError

_PROFILE_RE = re.compile(r"[A-Za-z0-9_-]{16,64}")
CSRF_HEADER = "X-CSRF-Token"


def get_core(request: Request) -> SoftPackApp:
    return request.app.state.softpack


def get_profile_id(request: Request, response: Response) -> str:
    """Read the profile cookie, issuing a fresh one when missing or malformed"""
    core = get_core(request)
    cookie_name = core.settings.web.profile_cookie_name
    profile_id = request.cookies.get(cookie_name)
    if profile_id and _PROFILE_RE.fullmatch(profile_id):
        return profile_id

    profile_id = secrets.token_urlsafe(24)
    response.set_cookie(
        key=cookie_name,
        value=profile_id,
        max_age=365 * 24 * 60 * 60,
        httponly=True,
        secure=core.settings.web.cookie_secure,
        samesite="lax",
    )
    return profile_id


def get_client_context(request: Request) -> ClientContext:
    return ClientContext(user_agent=request.headers.get("user-agent"), url=str(request.url))


def get_auth(
    request: Request,
    profile_id: str = Depends(get_profile_id),
    context: ClientContext = Depends(get_client_context),
) -> AuthStore:
    return get_core(request).auth_for(profile_id, context)


def get_current_user(auth: AuthStore = Depends(get_auth)) -> Optional[SessionUser]:
    """Session user for this profile, or None when anonymous"""
    return auth.current_user


def get_csrf_token(request: Request, profile_id: str = Depends(get_profile_id)) -> str:
    """CSRF token bound to this profile, issued on first use"""
    storage = get_core(request).storage
    key = csrf_key_for(profile_id)
    token = storage.get(key)
    if not isinstance(token, str) or not token:
        token = generate_csrf_token()
        storage.set(key, token)
    return token


def require_csrf(
    request: Request,
    profile_id: str = Depends(get_profile_id),
    context: ClientContext = Depends(get_client_context),
) -> None:
    """Reject state-changing calls whose X-CSRF-Token header does not match the profile's token"""
    core = get_core(request)
    expected = core.storage.get(csrf_key_for(profile_id))
    supplied = request.headers.get(CSRF_HEADER, "")
    if not isinstance(expected, str) or not verify_csrf_token(supplied, expected):
        core.security_log.record("csrf_validation_failed", {"path": request.url.path}, context)
        raise PermissionDeniedError("Invalid CSRF token")
