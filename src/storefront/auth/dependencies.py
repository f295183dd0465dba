"""FastAPI dependencies that resolve the caller from a bearer token."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.auth.tokens import decode_access_token
from storefront.user.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def authenticated_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    if credentials is None:
        raise _unauthorized("Authentication required")

    try:
        claims = decode_access_token(credentials.credentials)
    except JWTError:
        raise _unauthorized("Invalid or expired token") from None

    try:
        user = current_domain.repository_for(User).get(claims["sub"])
    except ObjectNotFoundError:
        raise _unauthorized("User not found") from None

    if not user.is_active:
        raise _unauthorized("User is inactive")
    return user


async def admin_user(user: User = Depends(authenticated_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")
    return user
