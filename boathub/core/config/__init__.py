"""
Sistema de configuração centralizado do cliente BoatHub.

Fornece gerenciamento unificado das configurações, com suporte a variáveis
de ambiente, arquivos de configuração e valores padrão.
"""

from typing import Optional

from .base import BaseConfig
from .client_config import ClientConfig
from .app_config import AppConfig
from .loader import ConfigLoader, ENV_PREFIX

# Instância global de configuração
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Obtém a configuração global da aplicação.

    Returns:
        AppConfig: Configuração global
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = ConfigLoader.load()
    return _config_instance


def reload_config() -> AppConfig:
    """Recarrega a configuração da aplicação."""
    global _config_instance
    _config_instance = ConfigLoader.load()
    return _config_instance


__all__ = [
    "BaseConfig",
    "ClientConfig",
    "AppConfig",
    "ConfigLoader",
    "ENV_PREFIX",
    "get_config",
    "reload_config",
]
