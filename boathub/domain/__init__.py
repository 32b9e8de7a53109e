"""Modelos de domínio do cliente BoatHub."""

from .token import SecurityToken, DEFAULT_HEADER_NAME, DEFAULT_FIELD_NAME
from .session import Identity, Session, SessionStatus
from .request import Attempt, PendingRequest, MUTATING_METHODS

__all__ = [
    "SecurityToken",
    "DEFAULT_HEADER_NAME",
    "DEFAULT_FIELD_NAME",
    "Identity",
    "Session",
    "SessionStatus",
    "Attempt",
    "PendingRequest",
    "MUTATING_METHODS",
]
