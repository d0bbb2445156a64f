"""FastAPI auth dependencies.

Usage in any privileged router:
    from src.dm_gateway.auth.dependencies import require_admin

    @router.post("/privileged")
    async def privileged(admin: Annotated[str, Depends(require_admin)]):
        ...
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.dm_common.errors import AdminRequiredError, InvalidCredentialsError
from src.dm_gateway.auth.jwt_handler import ROLE_ADMIN, decode_token

# No login endpoint here: admin tokens are minted by the operator tooling
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/admin/token", auto_error=True)

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def require_admin(token: Annotated[str, Depends(oauth2_scheme)]) -> str:
    """Validate the Bearer token and return the admin subject.

    Raises HTTP 401 if the token is invalid or expired.
    Raises HTTP 403 (AdminRequiredError) if the token lacks the admin role.
    """
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    if payload.get("role") != ROLE_ADMIN:
        raise AdminRequiredError()
    return payload["sub"]
