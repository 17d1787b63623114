"""Authentication dependencies.

Tokens are issued by the identity service. Here we only verify them and
turn the ``sub`` claim into an explicit Principal.
"""

from typing import Annotated

from fastapi import Depends, Header

from src.atogato.core.exceptions import UnauthenticatedError
from src.atogato.core.logging import bind_principal_context
from src.atogato.core.security import decode_token
from src.atogato.schemas.auth import Principal, TokenType


def _validate_access_token(authorization: str | None) -> Principal:
    """Validate a bearer access token and return its principal."""
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthenticatedError("Missing or invalid authorization header")

    token = authorization[7:]
    payload = decode_token(token)

    if payload is None:
        raise UnauthenticatedError("Invalid or expired token")

    if payload.get("type") != TokenType.ACCESS:
        raise UnauthenticatedError("Invalid token type")

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise UnauthenticatedError("Invalid token payload")

    return Principal(id=subject)


async def get_current_principal(
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """Validate access token and return the requesting principal."""
    principal = _validate_access_token(authorization)
    bind_principal_context(principal.id)
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
