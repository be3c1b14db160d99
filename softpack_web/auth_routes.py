"""
Authentication routes.

Prefix: /auth

Sessions belong to the caller's client profile (see deps.get_profile_id).
"""

from fastapi import APIRouter, Depends, Form, status

from softpack.auth.auth_store import AuthStore

from .deps import get_auth, get_csrf_token
from .schemas import MeResponse, UserResponse


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    auth: AuthStore = Depends(get_auth),
) -> UserResponse:
    """
    Register a new user and sign the profile in as that user.

    Request (form-encoded):
        name, email, password

    Response:
        { "user": { "id": "...", "email": "...", "name": "...", "role": "user" } }
    """
    user = auth.register(name=name, email=email, password=password)
    return UserResponse(user=user)


@router.post("/login", response_model=UserResponse)
async def login(
    email: str = Form(...),
    password: str = Form(...),
    auth: AuthStore = Depends(get_auth),
) -> UserResponse:
    """Log in; wrong email and wrong password produce the same 401"""
    user = auth.login(email=email, password=password)
    return UserResponse(user=user)


@router.post("/logout")
async def logout(auth: AuthStore = Depends(get_auth)) -> dict:
    auth.logout()
    return {"status": "success"}


@router.get("/me", response_model=MeResponse)
async def me(auth: AuthStore = Depends(get_auth)) -> MeResponse:
    return MeResponse(user=auth.current_user, is_loading=auth.is_loading)


@router.get("/csrf")
async def csrf_token(token: str = Depends(get_csrf_token)) -> dict:
    """Token to send as X-CSRF-Token on admin create/update/delete calls"""
    return {"csrf_token": token}
