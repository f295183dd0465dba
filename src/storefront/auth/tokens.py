"""Access tokens: signed JWTs carrying the user's id, email and role."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from storefront.config import Settings, get_settings


def issue_access_token(user, settings: Settings | None = None) -> dict:
    """Sign a token for ``user`` and wrap it in the login response envelope."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expires_in),
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return {
        "access_token": token,
        "token_type": "Bearer",
        "expires_in": settings.jwt_expires_in,
        "user": {
            "id": str(user.id),
            "email": user.email,
            "name": user.name,
            "avatar": user.avatar,
            "role": user.role,
        },
    }


def decode_access_token(token: str, settings: Settings | None = None) -> dict:
    """Verify signature and expiry. Raises ``JWTError`` on any problem."""
    settings = settings or get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require_sub": True, "require_exp": True},
    )
