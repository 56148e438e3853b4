"""
Cookie-based admin session.

Admins are configured as index-aligned comma lists: ADMIN_USERS holds
emails, ADMIN_PASSWORD_HASHES the sha256 hex digest of each password.
The session cookie carries `email|expires|signature`, signed with
ADMIN_SESSION_SECRET.
"""

from typing import Optional
import hashlib
import hmac
import time

from fastapi import Depends, HTTPException, Request, Response

from halal_bites.core.config import Settings, get_settings

COOKIE_NAME = "admin_session"


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode()).hexdigest()


def find_admin_index(settings: Settings, email: str) -> int:
    for idx, user in enumerate(settings.admin_users):
        if user.lower() == email.lower():
            return idx
    return -1


def verify_admin_password(settings: Settings, email: str, password: str) -> bool:
    idx = find_admin_index(settings, email)
    if idx == -1:
        return False
    hashes = settings.admin_password_hashes
    if idx >= len(hashes) or not hashes[idx]:
        return False
    return hmac.compare_digest(hash_password(password), hashes[idx].lower())


def _sign(secret: str, payload: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def make_session_token(settings: Settings, email: str, now: Optional[float] = None) -> str:
    issued = time.time() if now is None else now
    expires = int(issued + settings.ADMIN_SESSION_MAX_AGE)
    payload = f"{email.lower()}|{expires}"
    return f"{payload}|{_sign(settings.ADMIN_SESSION_SECRET, payload)}"


def read_session_token(settings: Settings, token: Optional[str], now: Optional[float] = None) -> Optional[str]:
    """Return the admin email for a valid, unexpired token, else None."""
    if not token:
        return None
    try:
        email, expires, signature = token.rsplit("|", 2)
        expires_at = int(expires)
    except ValueError:
        return None

    expected = _sign(settings.ADMIN_SESSION_SECRET, f"{email}|{expires}")
    if not hmac.compare_digest(signature, expected):
        return None
    if expires_at < (time.time() if now is None else now):
        return None
    if find_admin_index(settings, email) == -1:
        return None
    return email


def set_session_cookie(response: Response, settings: Settings, email: str) -> None:
    response.set_cookie(
        COOKIE_NAME,
        make_session_token(settings, email),
        max_age=settings.ADMIN_SESSION_MAX_AGE,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


def require_admin(request: Request, settings: Settings = Depends(get_settings)) -> str:
    email = read_session_token(settings, request.cookies.get(COOKIE_NAME))
    if email is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return email
