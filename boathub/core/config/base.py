"""
Classes base para o sistema de configuração.

Define a estrutura base e funcionalidades comuns para todas as configurações.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from dataclasses import MISSING, fields
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar, Union, get_args, get_origin, get_type_hints

from boathub.core.exceptions import InvalidConfigException

T = TypeVar('T', bound='BaseConfig')

# Campos cujo valor nunca aparece no __repr__
_SENSITIVE_MARKERS = ('password', 'secret', 'token_value')


class BaseConfig(ABC):
    """
    Classe base para configurações.

    Subclasses são dataclasses; esta base fornece carregamento de variáveis
    de ambiente, conversão de tipos, validação e serialização.
    """

    @classmethod
    def from_env(cls: Type[T], prefix: str = "") -> T:
        """
        Carrega configuração de variáveis de ambiente.

        O nome da variável é ``prefix + NOME_DO_CAMPO``. Campos ausentes no
        ambiente mantêm o valor padrão.

        Args:
            prefix: Prefixo para variáveis de ambiente (ex.: ``BOATHUB_``)

        Returns:
            Instância da configuração
        """
        config_data: Dict[str, Any] = {}
        type_hints = get_type_hints(cls)

        for field_info in fields(cls):
            env_value = os.getenv(f"{prefix}{field_info.name.upper()}")
            if env_value is not None:
                field_type = type_hints.get(field_info.name, str)
                config_data[field_info.name] = cls._parse_value(env_value, field_type)

        return cls(**config_data)

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Carrega configuração de um dicionário, ignorando chaves desconhecidas.

        Args:
            data: Dicionário com dados

        Returns:
            Instância da configuração
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in (data or {}).items() if k in valid_fields}
        return cls(**filtered_data)

    @classmethod
    def _parse_value(cls, value: str, target_type: Any) -> Any:
        """
        Converte string para o tipo desejado.

        Args:
            value: Valor string
            target_type: Tipo alvo

        Returns:
            Valor convertido

        Raises:
            InvalidConfigException: Se o valor não puder ser convertido
        """
        origin = get_origin(target_type)

        # Optional[T]
        if origin is Union:
            args = [arg for arg in get_args(target_type) if arg is not type(None)]
            if value.strip().lower() in ('none', 'null', ''):
                return None
            return cls._parse_value(value, args[0] if args else str)

        if origin in (list, List):
            item_type = get_args(target_type)[0] if get_args(target_type) else str
            return [cls._parse_value(item.strip(), item_type) for item in value.split(',') if item.strip()]

        try:
            if origin in (dict, Dict):
                return json.loads(value)

            if target_type is Path:
                return Path(value)

            if target_type is bool:
                return value.strip().lower() in ('true', '1', 'yes', 'on', 't', 'y')

            if target_type is int:
                return int(value)

            if target_type is float:
                return float(value)
        except ValueError as e:
            raise InvalidConfigException(
                f"Valor inválido para o tipo {getattr(target_type, '__name__', target_type)}",
                details={"valor": value},
                cause=e,
            ) from e

        return value

    def validate(self) -> None:
        """
        Valida a configuração.

        Raises:
            InvalidConfigException: Se algum campo for inválido
        """
        for field_info in fields(self):
            if field_info.default is MISSING and field_info.default_factory is MISSING:
                if getattr(self, field_info.name) is None:
                    raise InvalidConfigException(
                        f"Campo obrigatório não definido: {field_info.name}"
                    )

        self._validate_specific()

    @abstractmethod
    def _validate_specific(self) -> None:
        """Validação específica da subclasse."""

    def to_dict(self) -> Dict[str, Any]:
        """
        Converte configuração para dicionário.

        Returns:
            Dicionário com a configuração
        """
        result = {}
        for field_info in fields(self):
            value = getattr(self, field_info.name)

            if isinstance(value, Path):
                value = str(value)
            elif hasattr(value, 'to_dict'):
                value = value.to_dict()
            elif hasattr(value, '__dataclass_fields__'):
                value = {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
            elif isinstance(value, (list, tuple)):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)

            result[field_info.name] = value

        return result

    def __repr__(self) -> str:
        items = []
        for field_info in fields(self):
            value = getattr(self, field_info.name)
            if any(marker in field_info.name.lower() for marker in _SENSITIVE_MARKERS):
                value = '***'
            items.append(f"{field_info.name}={value!r}")

        return f"{self.__class__.__name__}({', '.join(items)})"


def _plain(value: Any) -> Any:
    """Converte Path em string para serialização."""
    return str(value) if isinstance(value, Path) else value
