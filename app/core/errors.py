"""
Domain error taxonomy.

Services raise these; app.main maps them to HTTP responses. Malformed request
bodies never get here: pydantic rejects them and app.main answers 400.
Nothing here depends on FastAPI so the services stay usable from the worker
and scripts.
"""
from __future__ import annotations


class DomainError(Exception):
    status_code: int = 400
    default_detail: str = "Bad request"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(DomainError):
    status_code = 401
    default_detail = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(DomainError):
    status_code = 403
    default_detail = "Not authorized"


class NotFound(DomainError):
    status_code = 404
    default_detail = "Not found"


class Conflict(DomainError):
    # the public API answers uniqueness problems with 400, not 409
    status_code = 400
    default_detail = "Conflict"


class AlreadyExists(Conflict):
    default_detail = "Already exists"


class DuplicateSubscription(Conflict):
    default_detail = "You already have a subscription to this plan"


class SelfFollowRejected(Conflict):
    default_detail = "You cannot follow yourself"


class InvalidTarget(DomainError):
    status_code = 400
    default_detail = "You can only follow trainer accounts"


class InvalidTransition(DomainError):
    status_code = 400
    default_detail = "Invalid status transition"
