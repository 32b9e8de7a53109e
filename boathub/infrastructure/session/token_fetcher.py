"""
Busca e renovação do token CSRF.

Garante no máximo uma busca em andamento por instância: chamadas
concorrentes aguardam a mesma task.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx
from pydantic import ValidationError

from boathub.core.config import ClientConfig
from boathub.core.exceptions import NetworkFailure, ProtocolFailure
from boathub.core.logging import debug_log
from boathub.domain.token import SecurityToken
from boathub.interfaces.services import ILoggingService, ITokenProvider
from boathub.schemas import CsrfTokenResponse
from boathub.services.base_service import AsyncService

from .token_store import TokenStore


class TokenFetcher(AsyncService, ITokenProvider):
    """
    Sincroniza o TokenStore com o endpoint de token do servidor.

    A requisição usa o mesmo ``httpx.AsyncClient`` do pipeline, logo envia
    os cookies da sessão.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        store: TokenStore,
        config: Optional[ClientConfig] = None,
        logger: Optional[ILoggingService] = None,
    ) -> None:
        super().__init__(logger)
        self._client = client
        self._store = store
        self._config = config or ClientConfig()
        self._inflight: Optional[asyncio.Task[SecurityToken]] = None

    @property
    def store(self) -> TokenStore:
        return self._store

    @property
    def token_path(self) -> str:
        return self._config.csrf_token_path

    @property
    def is_fetching(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def fetch(self) -> SecurityToken:
        """
        Busca um token novo, juntando-se a uma busca já em andamento.

        Raises:
            NetworkFailure: Endpoint inacessível
            ProtocolFailure: Resposta não-2xx, sem JSON ou sem token
        """
        if self._inflight is None or self._inflight.done():
            task = asyncio.get_running_loop().create_task(self._fetch_once())
            task.add_done_callback(self._on_fetch_done)
            self._inflight = task

        # shield: cancelar um chamador não cancela a busca compartilhada
        return await asyncio.shield(self._inflight)

    async def ensure(self) -> SecurityToken:
        token = self._store.get()
        if token.has_value:
            return token
        return await self.fetch()

    async def refresh(self) -> SecurityToken:
        """
        Descarta o valor atual e busca outro.

        Só o valor é descartado: uma busca já em andamento continua válida
        e é reaproveitada. Invalidar buscas pendentes cabe a ``TokenStore.clear``.
        """
        self._logger.debug("Renovando token CSRF")
        self._store.set(self._store.get().without_value())
        return await self.fetch()

    async def initialize(self) -> bool:
        """
        Busca o token na inicialização da aplicação.

        Nunca lança: a falha é registrada e o token será buscado de novo
        na primeira requisição que precisar dele.

        Returns:
            bool: True quando o token foi obtido
        """
        try:
            await self.initialize_async()
        except (NetworkFailure, ProtocolFailure) as e:
            self._logger.aviso("Não foi possível inicializar o token CSRF", erro=e)
            return False
        return True

    async def _initialize_async_impl(self) -> None:
        await self.fetch()

    @debug_log(log_args=False, log_result=False)
    async def _fetch_once(self) -> SecurityToken:
        path = self._config.csrf_token_path
        geracao = self._store.generation

        try:
            response = await self._client.get(path, headers={"Accept": "application/json"})
        except httpx.TransportError as e:
            raise NetworkFailure(
                "Falha de rede ao buscar token CSRF",
                details={"url": path},
                cause=e,
            ) from e

        if not response.is_success:
            raise ProtocolFailure(
                "Endpoint de token respondeu com erro",
                details={"status": response.status_code, "url": path},
            )

        try:
            payload = CsrfTokenResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ProtocolFailure(
                "Resposta do endpoint de token malformada",
                details={"url": path},
                cause=e,
            ) from e

        atual = self._store.get()
        token = SecurityToken(
            value=payload.token,
            header_name=payload.header_name or atual.header_name,
            field_name=payload.parameter_name or atual.field_name,
        )
        if not self._store.set_if_current(token, geracao):
            self._logger.debug("Token descartado: store limpo durante a busca")
            return token
        self._logger.debug("Token CSRF atualizado", header=token.header_name)
        return token

    def _on_fetch_done(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None
        # Marca a exceção como recuperada; os chamadores já a receberam via shield
        if not task.cancelled():
            task.exception()


__all__ = ["TokenFetcher"]
