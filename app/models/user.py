import enum
import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, Enum, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base, utcnow


class Role(str, enum.Enum):
    USER = "USER"
    TRAINER = "TRAINER"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # always stored lower-cased, so the unique index is case-insensitive in practice
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # fixed at signup, no route changes it
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, length=16), nullable=False, default=Role.USER
    )

    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    avatar: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    certification: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    plans = relationship("Plan", back_populates="trainer")
    subscriptions = relationship("Subscription", back_populates="user")

    @property
    def is_trainer(self) -> bool:
        return self.role is Role.TRAINER
