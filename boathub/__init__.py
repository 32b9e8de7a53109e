"""Cliente BoatHub: token CSRF, pipeline de requisições e sessão autenticada."""

from boathub.container import SimpleInjector, create_injector
from boathub.core.config import AppConfig, ClientConfig, get_config
from boathub.core.exceptions import (
    AuthRequired,
    BoathubBaseException,
    Forbidden,
    NetworkFailure,
    ProtocolFailure,
    RequestFailed,
)
from boathub.core.logging import LoggerConfig, configurar_logging, get_logger

__version__ = "1.0.0"

__all__ = [
    "SimpleInjector",
    "create_injector",
    "AppConfig",
    "ClientConfig",
    "get_config",
    "AuthRequired",
    "BoathubBaseException",
    "Forbidden",
    "NetworkFailure",
    "ProtocolFailure",
    "RequestFailed",
    "LoggerConfig",
    "configurar_logging",
    "get_logger",
]
