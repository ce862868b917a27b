# accounthub/shared/auth.py
import logging
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.middleware.base import BaseHTTPMiddleware

from accounthub.auth.hashing import PasswordHasher
from accounthub.auth.schemas import Principal
from accounthub.auth.service import AuthService
from accounthub.auth.tokens import TokenService, InvalidTokenError
from accounthub.notify.mailer import build_notifier
from accounthub.shared.config import settings, DEV_JWT_SECRET
from accounthub.shared.db import get_db
from accounthub.shared.errors import UnauthorizedError

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False, scheme_name="bearerAuth", bearerFormat="JWT")


@lru_cache
def get_token_service() -> TokenService:
    if settings.JWT_SECRET == DEV_JWT_SECRET and settings.ENV != "dev":
        logger.warning("JWT_SECRET is not set; signing with the built-in development key")
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALG,
        access_lifetime=timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MIN),
        refresh_lifetime=timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS),
    )


@lru_cache
def get_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def get_notifier():
    return build_notifier(settings)


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    hasher: PasswordHasher = Depends(get_hasher),
    notifier=Depends(get_notifier),
) -> AuthService:
    return AuthService(db, tokens, hasher, settings, notifier=notifier)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """`Bearer <token>` -> token; anything else is "no credential"."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


def principal_from_token(tokens: TokenService, token: Optional[str]) -> Optional[Principal]:
    if not token or not tokens.is_access_token(token):
        return None
    try:
        claims = tokens.parse(token)
        return Principal(user_id=int(claims["userId"]), email=claims["sub"])
    except (InvalidTokenError, KeyError, TypeError, ValueError):
        return None


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """
    Attach ``request.state.principal`` for requests carrying a valid access
    token. Never rejects: endpoints decide whether anonymous is acceptable.
    """

    def __init__(self, app, token_service_factory=get_token_service):
        super().__init__(app)
        self._tokens = token_service_factory

    async def dispatch(self, request: Request, call_next):
        token = bearer_token(request.headers.get("Authorization"))
        request.state.principal = principal_from_token(self._tokens(), token)
        return await call_next(request)


def current_principal(request: Request) -> Optional[Principal]:
    return getattr(request.state, "principal", None)


def require_principal(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),  # shows up in Swagger
) -> Principal:
    principal = current_principal(request)
    if principal is None:
        raise UnauthorizedError("Authentication required")
    return principal
