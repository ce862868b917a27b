# accounthub/auth/store.py
# Queries against users / categories / password_reset_tokens.
# Nothing here commits: the calling service owns the transaction.
from datetime import datetime
from typing import Iterable, List

from sqlalchemy import select, delete, exists
from sqlalchemy.orm import Session

from accounthub.auth.models import User, PasswordResetToken
from accounthub.categories.models import Category


# --- user directory ---
def find_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email)).first()


def email_exists(db: Session, email: str) -> bool:
    return bool(db.scalar(select(exists().where(User.email == email))))


def find_categories_by_ids(db: Session, ids: Iterable[int]) -> List[Category]:
    ids = list(dict.fromkeys(ids or []))
    if not ids:
        return []
    # unknown ids simply don't come back
    return list(db.scalars(select(Category).where(Category.id.in_(ids)).order_by(Category.id)))


# --- password reset tokens ---
def save_reset_token(db: Session, token: PasswordResetToken) -> PasswordResetToken:
    db.add(token)
    db.flush()
    return token


def find_reset_token(db: Session, token: str) -> PasswordResetToken | None:
    if not token:
        return None
    return db.scalars(select(PasswordResetToken).where(PasswordResetToken.token == token)).first()


def delete_reset_tokens_for_user(db: Session, user_id: int) -> None:
    db.execute(delete(PasswordResetToken).where(PasswordResetToken.user_id == user_id))


def delete_reset_token(db: Session, token: PasswordResetToken) -> None:
    db.delete(token)
    db.flush()


def delete_expired_reset_tokens(db: Session, before: datetime) -> int:
    stale = db.scalars(select(PasswordResetToken).where(PasswordResetToken.expires_at < before)).all()
    for t in stale:
        db.delete(t)
    db.flush()
    return len(stale)
