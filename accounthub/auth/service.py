"""
Account lifecycle: sign-up, sign-in, token refresh, session check and
password reset by email.

Every public method is one unit of work against the session it was given:
it commits once on success and rolls back on failure. Error messages are
kept generic so callers cannot tell which accounts exist.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounthub.auth import store
from accounthub.auth.hashing import PasswordHasher
from accounthub.auth.models import User, PasswordResetToken, Role, Location
from accounthub.auth.schemas import AuthResponse, SignUpRequest, UserOut
from accounthub.auth.tokens import TokenService, InvalidTokenError
from accounthub.notify.mailer import Notifier
from accounthub.shared.config import Settings
from accounthub.shared.errors import DuplicateError, UnauthorizedError

logger = logging.getLogger(__name__)

BAD_CREDENTIALS = "Invalid email or password"
BAD_SESSION = "Session expired or invalid"
BAD_REFRESH = "Invalid refresh token"
BAD_RESET_TOKEN = "Invalid or expired reset token"


class AuthService:
    def __init__(
        self,
        db: Session,
        tokens: TokenService,
        hasher: PasswordHasher,
        cfg: Settings,
        notifier: Optional[Notifier] = None,
    ):
        self.db = db
        self.tokens = tokens
        self.hasher = hasher
        self.cfg = cfg
        self.notifier = notifier

    def _token_pair(self, user: User, message: str, with_user: bool = True) -> AuthResponse:
        return AuthResponse(
            success=True,
            message=message,
            access_token=self.tokens.issue_access(user.email, user.id),
            refresh_token=self.tokens.issue_refresh(user.email, user.id),
            expires_in=self.tokens.access_lifetime_seconds(),
            user=UserOut.from_user(user) if with_user else None,
        )

    # --- sign-up / sign-in ---
    def sign_up(self, req: SignUpRequest) -> AuthResponse:
        email = str(req.email)
        if store.email_exists(self.db, email):
            raise DuplicateError(f"Email already registered: {email}")

        user = User(
            role=req.role,
            full_name=req.full_name,
            email=email,
            password_hash=self.hasher.hash(req.password),
            phone_number=req.phone_number,
            date_of_birth=req.date_of_birth,
            account_type=req.account_type,
        )
        if req.location is not None:
            user.location = Location(req.location.street_address, req.location.latitude, req.location.longitude)
        if req.role == Role.PROVIDER:
            user.service_categories = store.find_categories_by_ids(self.db, req.category_ids or [])
            user.custom_service_name = req.custom_service_name

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent sign-up for the same email
            self.db.rollback()
            raise DuplicateError(f"Email already registered: {email}")
        self.db.refresh(user)
        logger.info("registered user %s (id=%s, role=%s)", user.email, user.id, user.role.value)
        return self._token_pair(user, "Registration successful")

    def sign_in(self, email: str, password: str) -> AuthResponse:
        user = store.find_user_by_email(self.db, email)
        if not user or not self.hasher.verify(password, user.password_hash):
            logger.debug("sign-in rejected for %s", email)
            raise UnauthorizedError(BAD_CREDENTIALS)
        return self._token_pair(user, "Login successful")

    # --- tokens / session ---
    def refresh(self, refresh_token: Optional[str]) -> AuthResponse:
        if not refresh_token or not refresh_token.strip():
            raise UnauthorizedError("Refresh token required")
        if not self.tokens.is_refresh_token(refresh_token):
            raise UnauthorizedError(BAD_REFRESH)
        try:
            claims = self.tokens.parse(refresh_token)
        except InvalidTokenError:
            raise UnauthorizedError(BAD_REFRESH)
        user = store.find_user_by_email(self.db, claims["sub"])
        if not user:
            logger.debug("refresh token subject %s no longer exists", claims["sub"])
            raise UnauthorizedError(BAD_REFRESH)
        return self._token_pair(user, "Token refreshed", with_user=False)

    def check_session(self, access_token: Optional[str]) -> AuthResponse:
        if not access_token or not access_token.strip():
            raise UnauthorizedError(BAD_SESSION)
        try:
            if not self.tokens.is_access_token(access_token):
                raise UnauthorizedError(BAD_SESSION)
            claims = self.tokens.parse(access_token)
            user = store.find_user_by_email(self.db, claims["sub"])
            if not user:
                raise UnauthorizedError(BAD_SESSION)
            return AuthResponse(success=True, user=UserOut.from_user(user))
        except UnauthorizedError:
            raise
        except InvalidTokenError:
            logger.debug("check session failed: invalid or expired token")
            raise UnauthorizedError(BAD_SESSION)
        except Exception:
            logger.warning("check session failed", exc_info=True)
            raise UnauthorizedError(BAD_SESSION)

    def logout(self) -> AuthResponse:
        # tokens are stateless; the client simply drops them
        return AuthResponse(success=True, message="Logged out successfully")

    # --- password reset ---
    def forgot_password(self, email: str) -> None:
        user = store.find_user_by_email(self.db, email)
        if user is None:
            logger.debug("forgot password requested for unknown email: %s", email)
            return

        valid_minutes = self.cfg.RESET_TOKEN_VALID_MINUTES
        token = secrets.token_urlsafe(32)
        try:
            store.delete_reset_tokens_for_user(self.db, user.id)
            store.save_reset_token(self.db, PasswordResetToken(
                token=token,
                user_id=user.id,
                expires_at=datetime.now(timezone.utc) + timedelta(minutes=valid_minutes),
            ))
            self.db.commit()
        except IntegrityError:
            # a concurrent request already issued this user's token and mail
            self.db.rollback()
            logger.info("reset token for %s issued concurrently; skipping", email)
            return
        except Exception:
            self.db.rollback()
            raise

        link = f"{self.cfg.RESET_PASSWORD_BASE_URL.rstrip('/')}/reset-password?token={token}"
        if self.notifier is None:
            logger.info("no mail sender configured; reset link for %s: %s", user.email, link)
            return
        try:
            self.notifier.send(
                user.email,
                "Reset your password",
                f"Use this link to reset your password (valid {valid_minutes} minutes):\n\n{link}",
            )
            logger.info("password reset email sent to %s", user.email)
        except Exception as e:
            logger.warning("failed to send reset email to %s: %s", user.email, e)

    def reset_password(self, token: str, new_password: str) -> None:
        reset = store.find_reset_token(self.db, token)
        if reset is None:
            raise UnauthorizedError(BAD_RESET_TOKEN)
        if reset.user is None or reset.is_expired():
            store.delete_reset_token(self.db, reset)
            self.db.commit()
            raise UnauthorizedError(BAD_RESET_TOKEN)

        user = reset.user
        try:
            user.password_hash = self.hasher.hash(new_password)
            store.delete_reset_token(self.db, reset)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("password reset completed for user %s", user.email)

    def purge_expired_reset_tokens(self, now: Optional[datetime] = None) -> int:
        removed = store.delete_expired_reset_tokens(self.db, now or datetime.now(timezone.utc))
        self.db.commit()
        if removed:
            logger.info("purged %d expired password reset tokens", removed)
        return removed
