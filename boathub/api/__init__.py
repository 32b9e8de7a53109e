"""Clientes das APIs do servidor BoatHub."""

from .base_api import BaseAPIClient
from .auth_api import AuthAPI
from .boat_api import BoatAPI

__all__ = ["BaseAPIClient", "AuthAPI", "BoatAPI"]
