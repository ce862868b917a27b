# accounthub/users/api.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from accounthub.auth.hashing import PasswordHasher
from accounthub.auth.schemas import UserOut
from accounthub.shared.auth import get_hasher
from accounthub.shared.db import get_db
from accounthub.users import service
from accounthub.users.schemas import UserCreate, UserUpdate

router = APIRouter(prefix="/api/users", tags=["Users"])

_user = dict(response_model=UserOut, response_model_exclude_none=True)


@router.post("", status_code=201, **_user)
def api_create_user(inb: UserCreate, db: Session = Depends(get_db), hasher: PasswordHasher = Depends(get_hasher)):
    return UserOut.from_user(service.create_user(db, hasher, inb))

@router.get("", response_model=List[UserOut], response_model_exclude_none=True)
def api_list_users(db: Session = Depends(get_db)):
    return [UserOut.from_user(u) for u in service.list_users(db)]

@router.get("/{user_id}", **_user)
def api_get_user(user_id: int, db: Session = Depends(get_db)):
    return UserOut.from_user(service.get_user(db, user_id))

@router.put("/{user_id}", **_user)
def api_update_user(
    user_id: int,
    inb: UserUpdate,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    return UserOut.from_user(service.update_user(db, hasher, user_id, inb))

@router.delete("/{user_id}", status_code=204)
def api_delete_user(user_id: int, db: Session = Depends(get_db)):
    service.delete_user(db, user_id)
    return Response(status_code=204)
