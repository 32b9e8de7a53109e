"""Contrato do logger usado pelos serviços do cliente."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any


class ILoggingService(ABC):
    """
    Logger com níveis em português e contexto acumulável.

    Os dados extras viram pares ``chave=valor`` na saída. Valores de token
    nunca devem ser passados como dados.
    """

    @abstractmethod
    def debug(self, mensagem: str, **dados: Any) -> None:
        ...

    @abstractmethod
    def info(self, mensagem: str, **dados: Any) -> None:
        ...

    @abstractmethod
    def sucesso(self, mensagem: str, **dados: Any) -> None:
        ...

    @abstractmethod
    def aviso(self, mensagem: str, **dados: Any) -> None:
        ...

    @abstractmethod
    def erro(self, mensagem: str, **dados: Any) -> None:
        ...

    @abstractmethod
    def critico(self, mensagem: str, **dados: Any) -> None:
        ...

    @abstractmethod
    def com_contexto(self, **dados: Any) -> "ILoggingService":
        """Logger derivado que inclui ``dados`` em todas as mensagens."""

    @abstractmethod
    def etapa(self, titulo: str, **dados: Any) -> AbstractContextManager[None]:
        """Registra início, conclusão e falha de um bloco."""


__all__ = ['ILoggingService']
