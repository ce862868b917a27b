"""
Signed access/refresh tokens.

Both kinds share one HMAC key; the ``type`` claim tells them apart and every
validation call site must check it.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt, JWTError, ExpiredSignatureError  # python-jose[cryptography]

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"

# HS256 needs a key at least as long as its digest
MIN_SECRET_BYTES = 32


class InvalidTokenError(Exception):
    """Signature, structure or expiry check failed."""


class TokenService:
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_lifetime: timedelta = timedelta(minutes=15),
        refresh_lifetime: timedelta = timedelta(days=7),
    ):
        if len(secret.encode("utf-8")) < MIN_SECRET_BYTES:
            raise ValueError(f"JWT secret must be at least {MIN_SECRET_BYTES} bytes")
        self._secret = secret
        self.algorithm = algorithm
        self.access_lifetime = access_lifetime
        self.refresh_lifetime = refresh_lifetime

    def _issue(self, email: str, user_id: int, kind: str, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": email,
            "userId": user_id,
            "type": kind,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def issue_access(self, email: str, user_id: int) -> str:
        return self._issue(email, user_id, ACCESS, self.access_lifetime)

    def issue_refresh(self, email: str, user_id: int) -> str:
        return self._issue(email, user_id, REFRESH, self.refresh_lifetime)

    def parse(self, token: str) -> Dict[str, Any]:
        """Return the verified claims or raise InvalidTokenError."""
        if not isinstance(token, str) or not token:
            raise InvalidTokenError("empty token")
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            logger.debug("token expired")
            raise InvalidTokenError("token expired") from e
        except JWTError as e:
            logger.debug("token rejected: %s", e)
            raise InvalidTokenError(str(e)) from e
        if not claims.get("sub"):
            raise InvalidTokenError("missing sub")
        return claims

    def _is_kind(self, token: str, kind: str) -> bool:
        try:
            return self.parse(token).get("type") == kind
        except InvalidTokenError:
            return False

    def is_access_token(self, token: str) -> bool:
        return self._is_kind(token, ACCESS)

    def is_refresh_token(self, token: str) -> bool:
        return self._is_kind(token, REFRESH)

    def access_lifetime_seconds(self) -> int:
        return int(self.access_lifetime.total_seconds())
