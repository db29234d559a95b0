from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.models import User
from app.schemas.feed import FeedOut
from app.services.feed import personalized_feed

router = APIRouter()


@router.get("/personalized", response_model=FeedOut, response_model_exclude_none=True)
def personalized(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return personalized_feed(db, user.id)
