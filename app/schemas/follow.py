from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.user import Role


class FollowOut(BaseModel):
    id: uuid.UUID
    follower_id: uuid.UUID
    following_id: uuid.UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FollowCreatedOut(BaseModel):
    message: str
    follow: FollowOut


class FollowedTrainerOut(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    avatar: str
    bio: str
    certification: str
    role: Role

    model_config = ConfigDict(from_attributes=True)


class FollowerOut(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    avatar: str

    model_config = ConfigDict(from_attributes=True)


class FollowingListOut(BaseModel):
    trainers: list[FollowedTrainerOut]


class FollowerListOut(BaseModel):
    followers: list[FollowerOut]


class FollowCheckOut(BaseModel):
    is_following: bool
