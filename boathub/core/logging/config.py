"""
Configuração do sistema de logging.

Todos os campos possuem valores padrão seguros para uso local, mas podem
ser sobrescritos via parâmetros ou variáveis de ambiente.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# Mapeamento de níveis (SUCCESS é nível customizado)
LEVEL_VALUES = {
    "DEBUG": 10,
    "INFO": 20,
    "SUCCESS": 25,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

# Aliases em português aceitos pela API do logger
LEVEL_ALIASES = {
    "debug": "DEBUG",
    "info": "INFO",
    "sucesso": "SUCCESS",
    "success": "SUCCESS",
    "aviso": "WARNING",
    "warning": "WARNING",
    "erro": "ERROR",
    "error": "ERROR",
    "critico": "CRITICAL",
    "critical": "CRITICAL",
}


@dataclass
class LoggerConfig:
    """
    Configuração centralizada do logger.

    Attributes:
        nome: Nome do logger
        nivel_minimo: Nível mínimo de log (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
        arquivo_log: Caminho para arquivo de log (opcional)
        sobrescrever_arquivo: Se deve recriar o arquivo a cada execução
        mostrar_tempo: Se deve mostrar o horário no console
        usar_cores: Se deve usar cores no console
        registrar_traceback_rico: Se deve instalar o traceback estilizado do rich
    """

    nome: str = "boathub"
    nivel_minimo: str = "INFO"
    arquivo_log: Optional[Path] = None
    sobrescrever_arquivo: bool = False
    mostrar_tempo: bool = True
    usar_cores: bool = True
    registrar_traceback_rico: bool = False

    @classmethod
    def from_env(cls) -> LoggerConfig:
        """
        Cria configuração baseada em variáveis de ambiente.

        Variáveis suportadas:
            LOG_LEVEL: Nível mínimo de log
            LOG_FILE: Arquivo de log
            LOG_OVERWRITE: Se deve sobrescrever arquivo
            LOG_COLORS: Se deve usar cores
            LOG_RICH_TRACEBACK: Se deve instalar traceback do rich

        Returns:
            LoggerConfig: Configuração construída
        """
        config = cls()

        if nivel := os.getenv("LOG_LEVEL"):
            config.nivel_minimo = nivel.upper()

        if arquivo := os.getenv("LOG_FILE"):
            config.arquivo_log = Path(arquivo)

        config.sobrescrever_arquivo = _parse_bool(
            os.getenv("LOG_OVERWRITE"),
            config.sobrescrever_arquivo
        )
        config.usar_cores = _parse_bool(
            os.getenv("LOG_COLORS"),
            config.usar_cores
        )
        config.registrar_traceback_rico = _parse_bool(
            os.getenv("LOG_RICH_TRACEBACK"),
            config.registrar_traceback_rico
        )

        return config

    def validate(self) -> None:
        """
        Valida a configuração.

        Raises:
            ValueError: Se alguma configuração for inválida
        """
        if normalize_level(self.nivel_minimo) is None:
            raise ValueError(f"Nível inválido: {self.nivel_minimo}")

        if self.arquivo_log:
            Path(self.arquivo_log).parent.mkdir(parents=True, exist_ok=True)


def normalize_level(nivel: str | int) -> Optional[str]:
    """Converte nome/alias/valor numérico no nome canônico do nível."""
    if isinstance(nivel, int):
        return next((nome for nome, valor in LEVEL_VALUES.items() if valor == nivel), None)
    chave = str(nivel).strip()
    if chave.upper() in LEVEL_VALUES:
        return chave.upper()
    return LEVEL_ALIASES.get(chave.lower())


def _parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse de string para boolean."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
