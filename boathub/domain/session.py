"""Modelos de domínio da sessão autenticada."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class SessionStatus(str, Enum):
    """Estados da máquina de sessão."""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True, slots=True)
class Identity:
    """Usuário autenticado conforme retornado pelo servidor."""

    username: str
    authenticated: bool = True


@dataclass(frozen=True, slots=True)
class Session:
    """
    Snapshot da sessão do cliente.

    Invariante: ``authenticated`` implica ``user`` presente. O erro é apenas
    uma mensagem carregada, não um estado que bloqueie transições.
    """

    user: Optional[Identity] = None
    authenticated: bool = False
    pending: bool = False
    last_error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.authenticated and self.user is None:
            raise ValueError("Sessão autenticada exige usuário")

    @property
    def status(self) -> SessionStatus:
        if self.pending:
            return SessionStatus.AUTHENTICATING
        if self.authenticated:
            return SessionStatus.AUTHENTICATED
        return SessionStatus.UNAUTHENTICATED

    def begin(self) -> Session:
        """Entra em Authenticating limpando o erro anterior."""
        return replace(self, pending=True, last_error=None)

    def authenticate(self, user: Identity) -> Session:
        return Session(user=user, authenticated=True, pending=False, last_error=None)

    def unauthenticate(self, erro: Optional[str] = None, *, pending: bool = False) -> Session:
        return Session(user=None, authenticated=False, pending=pending, last_error=erro)


__all__ = ["SessionStatus", "Identity", "Session"]
