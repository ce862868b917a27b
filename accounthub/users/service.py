from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounthub.auth import store
from accounthub.auth.hashing import PasswordHasher
from accounthub.auth.models import User
from accounthub.shared.errors import DuplicateError, NotFoundError
from accounthub.users.schemas import UserCreate, UserUpdate


def _commit_or_duplicate(db: Session, email: str):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Email already registered: {email}")


def create_user(db: Session, hasher: PasswordHasher, payload: UserCreate) -> User:
    email = str(payload.email)
    if store.email_exists(db, email):
        raise DuplicateError(f"Email already registered: {email}")
    user = User(
        full_name=payload.full_name,
        email=email,
        password_hash=hasher.hash(payload.password),
        role=payload.role,
        account_type=payload.account_type,
    )
    db.add(user)
    _commit_or_duplicate(db, email)
    db.refresh(user)
    return user

def list_users(db: Session) -> list[User]:
    return list(db.scalars(select(User).order_by(User.id)))

def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError.for_id("User", user_id)
    return user

def update_user(db: Session, hasher: PasswordHasher, user_id: int, payload: UserUpdate) -> User:
    user = get_user(db, user_id)
    email = str(payload.email)
    if user.email != email and store.email_exists(db, email):
        raise DuplicateError(f"Email already registered: {email}")
    user.full_name = payload.full_name
    user.email = email
    if payload.password and payload.password.strip():
        user.password_hash = hasher.hash(payload.password)
    _commit_or_duplicate(db, email)
    db.refresh(user)
    return user

def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
