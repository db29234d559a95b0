import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.models import User
from app.schemas.follow import (
    FollowCheckOut,
    FollowCreatedOut,
    FollowedTrainerOut,
    FollowerListOut,
    FollowerOut,
    FollowOut,
    FollowingListOut,
)
from app.schemas.plans import MessageOut
from app.services import follow_graph

router = APIRouter()


# static paths first, /{trainer_id} would swallow them otherwise
@router.get("/following", response_model=FollowingListOut)
def following(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    trainers = follow_graph.list_following(db, user.id)
    return FollowingListOut(trainers=[FollowedTrainerOut.model_validate(u) for u in trainers])


@router.get("/followers/{trainer_id}", response_model=FollowerListOut)
def followers(trainer_id: uuid.UUID, db: Session = Depends(get_db)):
    accounts = follow_graph.list_followers(db, trainer_id)
    return FollowerListOut(followers=[FollowerOut.model_validate(u) for u in accounts])


@router.get("/check/{trainer_id}", response_model=FollowCheckOut)
def check(trainer_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return FollowCheckOut(is_following=follow_graph.is_following(db, user.id, trainer_id))


@router.post("/{trainer_id}", response_model=FollowCreatedOut, status_code=201)
def follow(trainer_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    edge = follow_graph.follow(db, user.id, trainer_id)
    return FollowCreatedOut(message="Successfully followed trainer", follow=FollowOut.model_validate(edge))


@router.delete("/{trainer_id}", response_model=MessageOut)
def unfollow(trainer_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    follow_graph.unfollow(db, user.id, trainer_id)
    return MessageOut(message="Successfully unfollowed trainer")
