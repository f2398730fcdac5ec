"""
JWT session tokens for the admin panel.
Provides token issuing, verification and the FastAPI auth dependencies.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status, Header, Request
from app.config import settings
from app.utils.auth import verify_admin_credentials


ALGORITHM = "HS256"


def create_access_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for the admin.

    Args:
        email: Admin email, stored as the token subject
        expires_delta: Optional custom lifetime (default JWT_EXPIRE_MINUTES)
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES))

    to_encode = {
        "sub": email,
        "role": "admin",
        "exp": expire,
        "iat": now,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode a session token.

    Returns:
        dict: Token payload, or None if the token is invalid, expired or not an access token
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None

    if payload.get("type") != "access" or not payload.get("sub"):
        return None
    return payload


def token_from_request(request: Request, authorization: Optional[str] = None) -> Optional[str]:
    """Session token from the httpOnly cookie, falling back to an Authorization: Bearer header."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token and authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            token = parts[1]
    return token


def current_user(request: Request) -> Optional[dict]:
    """The signed-in admin as {"email": ...}, or None without a valid session."""
    token = token_from_request(request, request.headers.get("authorization"))
    payload = decode_token(token) if token else None
    if payload is None:
        return None
    return {"email": payload["sub"]}


def get_current_admin(
    request: Request,
    authorization: Optional[str] = Header(None, description="Bearer token (fallback to session cookie)")
) -> dict:
    """
    FastAPI dependency guarding the admin API.

    Raises:
        HTTPException: 401 if the session token is missing, invalid or expired
    """
    token = token_from_request(request, authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Missing token", "detail": "Authentication required"},
            headers={"WWW-Authenticate": "Bearer"}
        )

    payload = decode_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid token", "detail": "Session is invalid or expired, please sign in again"},
            headers={"WWW-Authenticate": "Bearer"}
        )
    return {"email": payload["sub"]}


def authenticate_user(email: str, password: str) -> dict:
    """
    Check the login form and return the admin identity.

    Raises:
        HTTPException: 401 on wrong credentials, 500 if the admin account is not configured
    """
    try:
        ok = verify_admin_credentials(email, password)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Server configuration error", "detail": str(e)}
        )

    if not ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid credentials", "detail": "Invalid login credentials"}
        )
    return {"email": email.strip().lower()}
