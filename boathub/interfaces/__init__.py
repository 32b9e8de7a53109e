"""Interfaces públicas utilizadas pelo container de injeção."""

from .services import (
    ILoggingService,
    INavigator,
    IRequestPipeline,
    ISessionManager,
    ITokenProvider,
)

__all__ = [
    "ILoggingService",
    "INavigator",
    "IRequestPipeline",
    "ISessionManager",
    "ITokenProvider",
]
