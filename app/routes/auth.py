"""
Admin session routes: sign in, sign out and current session lookup.
"""
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.config import settings
from app.schemas import LoginRequest, SessionResponse
from app.utils.jwt_auth import authenticate_user, create_access_token, get_current_admin
from app.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(request: Request, credentials: LoginRequest):
    """
    Sign in with the admin email and password.

    On success the session token is set as an httpOnly cookie and also
    returned in the body for API clients.
    """
    user = authenticate_user(credentials.email, credentials.password)
    token = create_access_token(user["email"])
    max_age = settings.JWT_EXPIRE_MINUTES * 60

    response = JSONResponse(
        status_code=status.HTTP_200_OK,
        content=SessionResponse(
            email=user["email"],
            access_token=token,
            expires_in=max_age,
        ).model_dump()
    )
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=request.url.scheme == "https",
    )
    logger.info(f"Admin signed in: {user['email']}")
    return response


@router.post("/logout")
async def logout():
    """Sign out by clearing the session cookie."""
    response = JSONResponse(content={"message": "Signed out"})
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/session", response_model=SessionResponse)
async def get_session(user: dict = Depends(get_current_admin)):
    """Current signed-in admin, or 401."""
    return SessionResponse(email=user["email"])
