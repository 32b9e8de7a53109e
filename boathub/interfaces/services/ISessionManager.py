"""Interface para gerenciamento da sessão autenticada."""

from __future__ import annotations
from abc import ABC, abstractmethod

from boathub.domain.session import Session, SessionStatus


class ISessionManager(ABC):
    """
    Interface da máquina de estados da sessão.

    Login, logout e verificação de sessão nunca propagam erros do servidor:
    o resultado é refletido no estado e, quando aplicável, no retorno booleano.
    """

    @property
    @abstractmethod
    def session(self) -> Session:
        """Snapshot imutável do estado atual."""
        ...

    @property
    @abstractmethod
    def status(self) -> SessionStatus:
        ...

    @abstractmethod
    async def login(self, username: str, password: str) -> bool:
        """
        Autentica o usuário.

        Returns:
            bool: True quando a sessão foi estabelecida
        """
        ...

    @abstractmethod
    async def logout(self) -> None:
        """Encerra a sessão; o estado local é sempre limpo."""
        ...

    @abstractmethod
    async def check_auth(self) -> bool:
        """Consulta o usuário atual no servidor e ajusta o estado."""
        ...

    @abstractmethod
    def mark_unauthenticated(self) -> None:
        """Sinal de sessão expirada vindo do pipeline (HTTP 401)."""
        ...


__all__ = ['ISessionManager']
