"""Interfaces relacionadas a serviços."""

from .ILoggingService import ILoggingService
from .INavigator import INavigator
from .IRequestPipeline import IRequestPipeline
from .ISessionManager import ISessionManager
from .ITokenProvider import ITokenProvider

__all__ = [
    "ILoggingService",
    "INavigator",
    "IRequestPipeline",
    "ISessionManager",
    "ITokenProvider",
]
