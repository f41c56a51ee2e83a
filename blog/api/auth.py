"""Authentication API endpoints."""

import secrets
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Query, Response, status
from fastapi.responses import RedirectResponse

from blog.api.dependencies import (
    ACCESS_TOKEN_COOKIE,
    get_auth_service,
    get_current_user,
    get_google_client,
)
from blog.config import Settings, get_settings
from blog.errors import InvalidCredentialsError
from blog.models.user import User
from blog.schemas.auth import AuthResponse, UserLogin, UserRegister
from blog.schemas.user import UserResponse
from blog.services.auth import AuthService
from blog.services.google_oauth import GoogleOAuthClient

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

OAUTH_STATE_COOKIE = "oauth_state"


def _session_response(
    response: Response, token: str, user: User, settings: Settings
) -> AuthResponse:
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        token,
        max_age=settings.jwt_expiration_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return AuthResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Register a new local user."""
    token, user = auth_service.register(user_data)
    return _session_response(response, token, user, settings)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email and password."""
    token, user = auth_service.login(credentials.email, credentials.password)
    return _session_response(response, token, user, settings)


@router.get("/google/login")
def google_login(google: Annotated[GoogleOAuthClient, Depends(get_google_client)]):
    """Redirect the browser to Google's consent screen."""
    state = secrets.token_urlsafe(16)
    redirect = RedirectResponse(
        google.authorization_url(state), status_code=status.HTTP_307_TEMPORARY_REDIRECT
    )
    redirect.set_cookie(OAUTH_STATE_COOKIE, state, max_age=600, httponly=True, samesite="lax")
    return redirect


@router.post("/google/callback", response_model=AuthResponse)
async def google_callback(
    response: Response,
    google: Annotated[GoogleOAuthClient, Depends(get_google_client)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    code: str = Query(..., min_length=1),
    state: str | None = Query(default=None),
    oauth_state: Annotated[str | None, Cookie()] = None,
):
    """Finish the Google login started by /google/login.

    The state must echo the cookie set by /google/login, and Google must
    have verified the account's e-mail.
    """
    if state is None or oauth_state is None or not secrets.compare_digest(state, oauth_state):
        raise InvalidCredentialsError("OAuth state mismatch")

    info = await google.fetch_user_info(code)
    if not info.verified_email:
        raise InvalidCredentialsError("Google account e-mail is not verified")

    token, user = auth_service.login_or_register_with_google(
        info.email, info.name, info.id, info.picture
    )
    response.delete_cookie(OAUTH_STATE_COOKIE)
    return _session_response(response, token, user, settings)


@router.get("/session", response_model=UserResponse)
def get_session(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/logout")
def logout(
    response: Response,
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout by clearing the session cookie (bearer clients discard their token)."""
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    return {"message": "Logged out successfully"}
