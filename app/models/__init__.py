from app.core.db import Base

from .user import User, Role
from .plan import Plan, Difficulty
from .follow import Follow
from .subscription import Subscription, SubscriptionStatus

__all__ = [
    "Base",
    "User",
    "Role",
    "Plan",
    "Difficulty",
    "Follow",
    "Subscription",
    "SubscriptionStatus",
]
