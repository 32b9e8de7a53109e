"""Interface para obtenção do token anti-falsificação."""

from __future__ import annotations
from abc import ABC, abstractmethod

from boathub.domain.token import SecurityToken


class ITokenProvider(ABC):
    """
    Contrato do componente que sincroniza o token CSRF com o servidor.

    Implementações devem garantir no máximo uma busca em andamento por vez:
    chamadas concorrentes aguardam a mesma operação.
    """

    @abstractmethod
    async def fetch(self) -> SecurityToken:
        """
        Busca um novo token no servidor e o grava no TokenStore.

        Raises:
            NetworkFailure: Se o endpoint estiver inacessível
            ProtocolFailure: Se a resposta não for bem formada
        """
        ...

    @abstractmethod
    async def ensure(self) -> SecurityToken:
        """Retorna o token atual ou busca um quando ausente."""
        ...

    @abstractmethod
    async def refresh(self) -> SecurityToken:
        """Descarta o token atual e busca outro."""
        ...


__all__ = ['ITokenProvider']
