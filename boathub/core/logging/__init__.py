"""
Sistema de logging do BoatHub.

Expõe o logger singleton, a configuração e o decorator de debug.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

from .config import LoggerConfig, LEVEL_VALUES
from .logger import BoathubLogger, ScopedLogger
from .debug_decorator import debug_log, debug

# Singleton do logger principal
log = BoathubLogger(LoggerConfig.from_env())


def get_logger() -> BoathubLogger:
    """Retorna a instância singleton do logger."""
    return log


def configurar_logging(config: Optional[LoggerConfig] = None, **overrides: Any) -> BoathubLogger:
    """
    Configura o logger global e o retorna para encadeamento.

    Quando nenhuma configuração é informada, os valores são lidos das
    variáveis de ambiente suportadas.

    Args:
        config: Configuração opcional a ser aplicada.
        **overrides: Campos para sobrescrever na configuração final.

    Returns:
        Instância ``BoathubLogger`` configurada.
    """
    if config is None:
        config = LoggerConfig.from_env()
    if overrides:
        config = dataclasses.replace(config, **overrides)
    log.configure(config)
    return log


__all__ = [
    "LoggerConfig",
    "LEVEL_VALUES",
    "BoathubLogger",
    "ScopedLogger",
    "configurar_logging",
    "get_logger",
    "log",
    "debug_log",
    "debug",
]
