"""Serviços base do cliente BoatHub."""

from .base_service import AsyncService, BaseService

__all__ = ["AsyncService", "BaseService"]
