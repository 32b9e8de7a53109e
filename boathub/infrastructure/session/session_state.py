"""
Máquina de estados da sessão autenticada.

Estados: Unauthenticated → Authenticating → Authenticated. O erro é uma
mensagem carregada pela sessão e não bloqueia novas transições.

Transições sobrepostas são resolvidas pela última iniciada: cada transição
recebe um número de sequência e só a mais recente grava o resultado final.
"""

from __future__ import annotations

from typing import Optional

from boathub.api.auth_api import AuthAPI
from boathub.core.exceptions import BoathubBaseException
from boathub.domain.session import Identity, Session, SessionStatus
from boathub.interfaces.services import ILoggingService, ISessionManager, ITokenProvider
from boathub.services.base_service import BaseService

from .token_store import TokenStore


class SessionState(BaseService, ISessionManager):
    """
    Controla login, logout e verificação da sessão.

    Efeitos colaterais sobre o token:
    - login bem-sucedido renova o token (nova sessão, novo escopo de token)
    - logout sempre limpa o token, mesmo quando o servidor falha
    - check_auth não toca no token
    """

    def __init__(
        self,
        auth_api: AuthAPI,
        token_provider: ITokenProvider,
        store: TokenStore,
        logger: Optional[ILoggingService] = None,
    ) -> None:
        super().__init__(logger)
        self._auth = auth_api
        self._tokens = token_provider
        self._store = store
        self._session = Session()
        self._sequence = 0

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> SessionStatus:
        return self._session.status

    @property
    def is_authenticated(self) -> bool:
        return self._session.authenticated

    @property
    def pending(self) -> bool:
        return self._session.pending

    @property
    def error(self) -> Optional[str]:
        return self._session.last_error

    @property
    def username(self) -> Optional[str]:
        user = self._session.user
        return user.username if user else None

    # ------------------------------------------------------------------
    # Transições
    # ------------------------------------------------------------------

    async def login(self, username: str, password: str) -> bool:
        seq = self._begin()
        self._logger.info("Iniciando login", usuario=username)

        try:
            user = await self._auth.login(username, password)
        except BoathubBaseException as e:
            if self._is_current(seq):
                self._session = self._session.unauthenticate(e.message or "Falha no login")
            self._logger.aviso("Login falhou", usuario=username, erro=e.message)
            return False

        if not self._is_current(seq):
            self._logger.debug("Login concluído após transição mais recente, resultado descartado")
            return False

        self._session = self._session.authenticate(
            Identity(username=user.username, authenticated=user.authenticated)
        )
        self._logger.sucesso("Sessão autenticada", usuario=user.username)

        try:
            await self._tokens.refresh()
        except BoathubBaseException as e:
            self._logger.aviso("Não foi possível renovar o token CSRF após o login", erro=e)

        return True

    async def logout(self) -> None:
        seq = self._begin()
        erro: Optional[str] = None

        try:
            await self._auth.logout()
        except BoathubBaseException as e:
            erro = e.message or "Falha no logout"
            self._logger.aviso("Logout no servidor falhou, limpando estado local", erro=e.message)
        finally:
            self._store.clear()
            if self._is_current(seq):
                self._session = self._session.unauthenticate(erro)

        if erro is None:
            self._logger.info("Sessão encerrada")

    async def check_auth(self) -> bool:
        seq = self._begin()

        try:
            user = await self._auth.get_current_user()
        except BoathubBaseException as e:
            if self._is_current(seq):
                self._session = self._session.unauthenticate()
            self._logger.debug("Sessão não autenticada", motivo=e.message)
            return False

        if not self._is_current(seq):
            return self._session.authenticated

        self._session = self._session.authenticate(
            Identity(username=user.username, authenticated=user.authenticated)
        )
        return True

    def mark_unauthenticated(self) -> None:
        """Sinal do pipeline para HTTP 401; ``pending`` é preservado."""
        self._session = self._session.unauthenticate(pending=self._session.pending)

    def clear_error(self) -> None:
        self._session = Session(
            user=self._session.user,
            authenticated=self._session.authenticated,
            pending=self._session.pending,
        )

    def reset(self) -> None:
        """Descarta todo o estado da sessão e o token atual."""
        self._sequence += 1
        self._session = Session()
        self._store.clear()

    # ------------------------------------------------------------------
    # Auxiliares
    # ------------------------------------------------------------------

    def _begin(self) -> int:
        self._sequence += 1
        self._session = self._session.begin()
        return self._sequence

    def _is_current(self, seq: int) -> bool:
        return seq == self._sequence

    def __repr__(self) -> str:
        return f"SessionState(status={self.status.value}, usuario={self.username!r})"


__all__ = ["SessionState"]
