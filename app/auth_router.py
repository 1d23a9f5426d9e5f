import secrets
from datetime import UTC, datetime, timedelta

import jwt
import structlog
from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.config import settings
from app.exceptions import UnauthorizedError

logger = structlog.get_logger()

router = APIRouter()


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


def issue_token(username: str, owner_id: int) -> TokenResponse:
    lifetime = timedelta(minutes=settings.jwt_expire_minutes)
    payload = {"sub": username, "uid": owner_id, "exp": datetime.now(UTC) + lifetime}
    token = jwt.encode(payload, settings.jwt_secret, algorithm="HS256")
    return TokenResponse(access_token=token, expires_in=int(lifetime.total_seconds()))


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest) -> TokenResponse:
    username_ok = secrets.compare_digest(data.username.encode(), settings.auth_username.encode())
    password_ok = secrets.compare_digest(data.password.encode(), settings.auth_password.encode())
    if not (username_ok and password_ok):
        logger.info("login_failed", username=data.username)
        raise UnauthorizedError("Invalid credentials")

    logger.info("login_succeeded", username=data.username, owner_id=settings.auth_user_id)
    return issue_token(data.username, settings.auth_user_id)
