"""Security helpers for token verification and service credentials."""

from datetime import datetime, timedelta, timezone
import secrets

from jose import JWTError, jwt

from notification_service.config import get_settings


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` with the shared secret. Used by tooling and tests."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {**data, "exp": expire}, settings.secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def verify_service_api_key(candidate: str | None) -> bool:
    """Return ``True`` when ``candidate`` matches the configured service key."""

    if not candidate:
        return False
    expected = get_settings().service_api_key
    return secrets.compare_digest(candidate.encode(), expected.encode())
