"""
Configuração principal da aplicação.

Agrega as configurações específicas em uma única classe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from boathub.core.exceptions import InvalidConfigException, wrap_exception
from boathub.core.logging import LoggerConfig

from .base import BaseConfig
from .client_config import ClientConfig

VALID_ENVIRONMENTS = frozenset({"dev", "staging", "prod"})


@dataclass(repr=False)
class AppConfig(BaseConfig):
    """
    Configuração principal do cliente BoatHub.

    Attributes:
        app_name: Nome da aplicação
        version: Versão da aplicação
        debug: Modo debug ativado
        environment: Ambiente de execução (dev, staging, prod)
        client: Configuração do cliente HTTP
        logging: Configuração de logging
    """

    app_name: str = "BoatHub"
    version: str = "1.0.0"

    debug: bool = False
    environment: str = "prod"

    client: Optional[ClientConfig] = None
    logging: Optional[LoggerConfig] = None

    def __post_init__(self):
        if self.client is None:
            self.client = ClientConfig()

        if self.logging is None:
            self.logging = LoggerConfig()

    def _validate_specific(self) -> None:
        if self.environment not in VALID_ENVIRONMENTS:
            raise InvalidConfigException(f"Ambiente inválido: {self.environment}")

        self.client.validate()

        try:
            self.logging.validate()
        except ValueError as e:
            raise wrap_exception(e, InvalidConfigException, "Configuração de logging inválida") from e

    @classmethod
    def development(cls) -> AppConfig:
        """Configuração para desenvolvimento local (debug e logs detalhados)."""
        return cls(
            debug=True,
            environment="dev",
            logging=LoggerConfig(nivel_minimo="DEBUG"),
        )

    @classmethod
    def production(cls) -> AppConfig:
        return cls(
            debug=False,
            environment="prod",
            logging=LoggerConfig(nivel_minimo="INFO"),
        )

    @property
    def is_development(self) -> bool:
        return self.environment == "dev"

    @property
    def is_production(self) -> bool:
        return self.environment == "prod"
