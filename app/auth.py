import jwt
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.exceptions import UnauthorizedError

logger = structlog.get_logger()

_bearer = HTTPBearer()


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired") from None
    except jwt.InvalidTokenError:
        logger.info("token_rejected")
        raise UnauthorizedError("Invalid token") from None


async def verify_token(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer),  # noqa: B008
) -> dict:
    return decode_token(credentials.credentials)


async def get_owner_id(claims: dict = Depends(verify_token)) -> int:  # noqa: B008
    """Resolve the inventory owner from the token's `uid` claim."""
    owner_id = claims.get("uid")
    if not isinstance(owner_id, int) or isinstance(owner_id, bool):
        raise UnauthorizedError("Token carries no owner id")
    return owner_id
