"""
Loader para carregar configurações de diferentes fontes.

Suporta variáveis de ambiente, arquivos JSON/YAML e valores padrão.
"""

from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from boathub.core.exceptions import InvalidConfigException
from boathub.core.logging import LoggerConfig

from .app_config import AppConfig
from .base import BaseConfig
from .client_config import ClientConfig

ENV_PREFIX = "BOATHUB_"


class ConfigLoader:
    """
    Carregador de configurações.

    Ordem de prioridade (a última vence):
    1. Valores padrão
    2. Arquivo de configuração
    3. Variáveis de ambiente ``BOATHUB_*``
    """

    DEFAULT_CONFIG_PATHS = [
        Path("boathub.json"),
        Path("boathub.yaml"),
        Path(".boathub.json"),
        Path(".boathub.yaml"),
        Path.home() / ".boathub" / "config.json",
        Path.home() / ".boathub" / "config.yaml",
    ]

    @classmethod
    def load(
        cls,
        config_path: Optional[Path] = None,
        dotenv_path: Optional[Path] = None,
    ) -> AppConfig:
        """
        Carrega a configuração completa da aplicação.

        Args:
            config_path: Caminho específico para arquivo de configuração
            dotenv_path: Arquivo .env opcional; variáveis já definidas não são sobrescritas

        Returns:
            AppConfig: Configuração carregada e validada

        Raises:
            InvalidConfigException: Arquivo ilegível ou valores inválidos
        """
        load_dotenv(dotenv_path, override=False)

        config_data = cls._load_defaults()

        file_config = cls._load_from_file(config_path)
        if file_config:
            config_data = cls._merge_configs(config_data, file_config)

        config_data = cls._merge_configs(config_data, cls._load_from_env())

        config = cls._build_config(config_data)
        config.validate()
        return config

    @classmethod
    def _load_defaults(cls) -> Dict[str, Any]:
        return {
            "app_name": "BoatHub",
            "version": "1.0.0",
            "debug": False,
            "environment": "prod",
            "client": {},
            "logging": {},
        }

    @classmethod
    def _load_from_file(cls, config_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.exists():
                raise InvalidConfigException(
                    "Arquivo de configuração não encontrado",
                    details={"path": str(config_path)},
                )
            return cls._read_config_file(config_path)

        for path in cls.DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls._read_config_file(path)

        return None

    @classmethod
    def _read_config_file(cls, path: Path) -> Dict[str, Any]:
        """
        Lê arquivo de configuração JSON ou YAML.

        Raises:
            InvalidConfigException: Formato não suportado ou conteúdo inválido
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix == ".json":
                    data = json.load(f)
                elif path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    raise InvalidConfigException(
                        f"Formato de arquivo não suportado: {path.suffix}",
                        details={"path": str(path)},
                    )
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise InvalidConfigException(
                "Falha ao ler arquivo de configuração",
                details={"path": str(path)},
                cause=e,
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidConfigException(
                "Arquivo de configuração deve conter um objeto",
                details={"path": str(path)},
            )
        return data

    @classmethod
    def _load_from_env(cls) -> Dict[str, Any]:
        """Lê as variáveis ``BOATHUB_*`` conhecidas."""
        config: Dict[str, Any] = {}

        if debug := os.getenv(f"{ENV_PREFIX}DEBUG"):
            config["debug"] = debug.lower() in ("true", "1", "yes", "on")

        if env := os.getenv(f"{ENV_PREFIX}ENVIRONMENT"):
            config["environment"] = env

        # Client: mesmos nomes dos campos do ClientConfig
        client_defaults = ClientConfig.from_env(prefix=ENV_PREFIX)
        client_config = {
            key: value
            for key, value in client_defaults.to_dict().items()
            if os.getenv(f"{ENV_PREFIX}{key.upper()}") is not None
        }
        if client_config:
            config["client"] = client_config

        logging_config: Dict[str, Any] = {}
        if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            logging_config["nivel_minimo"] = log_level.upper()

        if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            logging_config["arquivo_log"] = log_file

        if logging_config:
            config["logging"] = logging_config

        return config

    @classmethod
    def _merge_configs(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Mescla duas configurações recursivamente."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = cls._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    @classmethod
    def _build_config(cls, data: Dict[str, Any]) -> AppConfig:
        data = dict(data)
        client_data = data.pop("client", {}) or {}
        logging_data = data.pop("logging", {}) or {}

        logging_config = LoggerConfig.from_env()
        overrides = {
            key: value for key, value in logging_data.items()
            if hasattr(logging_config, key)
        }
        if overrides.get("arquivo_log"):
            overrides["arquivo_log"] = Path(overrides["arquivo_log"])
        logging_config = replace(logging_config, **overrides)

        return AppConfig.from_dict({
            **data,
            "client": ClientConfig.from_dict(client_data),
            "logging": logging_config,
        })

    @classmethod
    def save(cls, config: BaseConfig, path: Path) -> None:
        """
        Salva configuração em arquivo JSON ou YAML.

        Raises:
            InvalidConfigException: Se formato não suportado
        """
        path = Path(path)
        if path.suffix not in (".json", ".yaml", ".yml"):
            raise InvalidConfigException(f"Formato de arquivo não suportado: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        config_dict = config.to_dict()

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix == ".json":
                json.dump(config_dict, f, indent=2, default=str)
            else:
                yaml.safe_dump(config_dict, f, default_flow_style=False, allow_unicode=True)
