"""Captura imutável de uma requisição em andamento."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class Attempt(str, Enum):
    """Etapa da requisição: a primeira tentativa ou a única repetição permitida."""
    FIRST = "first"
    RETRY = "retry"


@dataclass(frozen=True, slots=True)
class PendingRequest:
    """
    Requisição original do chamador, mantida apenas para a única repetição
    após falha de token.

    Os headers guardados são somente os extras do chamador; headers de
    segurança são reconstruídos a cada tentativa.
    """

    method: str
    endpoint: str
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))

    @property
    def is_mutating(self) -> bool:
        return self.method in MUTATING_METHODS


__all__ = ["Attempt", "PendingRequest", "MUTATING_METHODS"]
