# accounthub/categories/api.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from accounthub.auth.schemas import CategoryOut
from accounthub.categories.service import list_categories
from accounthub.shared.db import get_db

router = APIRouter(prefix="/api/categories", tags=["Categories"])

@router.get("", response_model=List[CategoryOut])
def api_list_categories(db: Session = Depends(get_db)):
    return list_categories(db)
