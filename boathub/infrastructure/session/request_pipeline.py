"""
Pipeline único de requisições HTTP.

Toda chamada da aplicação passa por aqui. O pipeline:
- anexa o token CSRF em métodos que alteram estado
- envia os cookies da sessão (jar compartilhado do ``httpx.AsyncClient``)
- classifica a resposta em sucesso ou erro tipado
- renova o token e repete a requisição uma única vez quando o servidor
  rejeita o token (403 de token inválido)
- sinaliza a sessão e redireciona para a página de entrada no 401
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import httpx

from boathub.core.config import ClientConfig
from boathub.core.exceptions import (
    AuthRequired,
    Forbidden,
    NetworkFailure,
    RequestFailed,
    TokenException,
)
from boathub.core.logging import debug_log
from boathub.domain.request import Attempt, PendingRequest
from boathub.interfaces.services import (
    ILoggingService,
    INavigator,
    IRequestPipeline,
    ISessionManager,
    ITokenProvider,
)
from boathub.schemas import WireModel
from boathub.services.base_service import BaseService


class RequestPipeline(BaseService, IRequestPipeline):
    """
    Ponto único de saída das requisições do cliente.

    A sessão é ligada depois da construção (``bind_session``) porque a
    própria máquina de sessão faz suas chamadas através deste pipeline.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_provider: ITokenProvider,
        config: Optional[ClientConfig] = None,
        navigator: Optional[INavigator] = None,
        session: Optional[ISessionManager] = None,
        logger: Optional[ILoggingService] = None,
    ) -> None:
        super().__init__(logger)
        self._client = client
        self._tokens = token_provider
        self._config = config or ClientConfig()
        self._navigator = navigator
        self._session = session
        self._markers = [m.lower() for m in self._config.token_mismatch_markers if m.strip()]

    def bind_session(self, session: ISessionManager) -> None:
        self._session = session

    @debug_log(log_args=False, log_result=False)
    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        extra_headers: Optional[Mapping[str, str]] = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Executa a requisição e retorna o payload decodificado.

        Args:
            endpoint: Caminho relativo à URL base (ou URL absoluta)
            method: Método HTTP
            body: Corpo JSON (dict, lista, schema) ou texto/bytes já serializados;
                para texto/bytes o ``Content-Type`` vem de ``extra_headers``
            extra_headers: Headers adicionais do chamador
            params: Parâmetros de query

        Returns:
            JSON decodificado, texto para respostas não-JSON ou ``None`` para
            204 / corpo vazio

        Raises:
            NetworkFailure: Falha de transporte (status 0)
            AuthRequired: HTTP 401
            Forbidden: HTTP 403, inclusive após a única repetição permitida
            RequestFailed: Qualquer outro status não-2xx
        """
        pending = PendingRequest(
            method=method,
            endpoint=endpoint,
            body=body,
            headers=extra_headers or {},
            params=params,
        )

        attempt: Optional[Attempt] = Attempt.FIRST
        while True:
            response = await self._send(pending, attempt)

            if not self._is_token_mismatch(pending, response):
                return self._handle_response(pending, response)

            attempt = self.next_attempt(attempt)
            if attempt is None:
                raise Forbidden(
                    "Acesso negado: token CSRF rejeitado após renovação",
                    url=pending.endpoint,
                )
            await self._refresh_token(pending)

    @staticmethod
    def next_attempt(attempt: Attempt) -> Optional[Attempt]:
        """Próxima etapa após uma rejeição de token; ``None`` encerra as tentativas."""
        if attempt is Attempt.FIRST:
            return Attempt.RETRY
        return None

    def is_exempt(self, endpoint: str) -> bool:
        """O endpoint de token nunca recebe o próprio token."""
        path = httpx.URL(endpoint).path.rstrip("/")
        return path == self._config.csrf_token_path.rstrip("/")

    # ------------------------------------------------------------------
    # Envio
    # ------------------------------------------------------------------

    async def _send(self, pending: PendingRequest, attempt: Attempt) -> httpx.Response:
        headers = await self._build_headers(pending)

        self._logger.debug(
            "Enviando requisição",
            metodo=pending.method,
            endpoint=pending.endpoint,
            tentativa=attempt.value,
        )

        try:
            return await self._client.request(
                pending.method,
                pending.endpoint,
                headers=headers,
                params=dict(pending.params) if pending.params else None,
                **self._encode_body(pending.body),
            )
        except httpx.TransportError as e:
            self._logger.erro(
                "Falha de rede",
                metodo=pending.method,
                endpoint=pending.endpoint,
                erro=e,
            )
            raise NetworkFailure(
                str(e) or "Erro de rede",
                details={"url": pending.endpoint, "method": pending.method},
                cause=e,
            ) from e

    async def _build_headers(self, pending: PendingRequest) -> Dict[str, str]:
        """Headers reconstruídos a cada tentativa a partir da requisição original."""
        headers = dict(pending.headers)
        if pending.is_mutating and not self.is_exempt(pending.endpoint):
            token = await self._tokens.ensure()
            headers.update(token.as_header())
        return headers

    @staticmethod
    def _encode_body(body: Any) -> Dict[str, Any]:
        if body is None:
            return {}
        if isinstance(body, WireModel):
            return {"json": body.to_payload()}
        if isinstance(body, (str, bytes)):
            return {"content": body}
        return {"json": body}

    async def _refresh_token(self, pending: PendingRequest) -> None:
        self._logger.aviso(
            "Token CSRF rejeitado, renovando e repetindo a requisição",
            metodo=pending.method,
            endpoint=pending.endpoint,
        )
        try:
            await self._tokens.refresh()
        except (NetworkFailure, TokenException) as e:
            raise Forbidden(
                "Acesso negado: não foi possível renovar o token CSRF",
                url=pending.endpoint,
                cause=e,
            ) from e

    # ------------------------------------------------------------------
    # Classificação
    # ------------------------------------------------------------------

    def _is_token_mismatch(self, pending: PendingRequest, response: httpx.Response) -> bool:
        if response.status_code != 403 or self.is_exempt(pending.endpoint):
            return False
        textos = " ".join(self._error_texts(response)).lower()
        return any(marker in textos for marker in self._markers)

    def _handle_response(self, pending: PendingRequest, response: httpx.Response) -> Any:
        status = response.status_code

        if response.is_success:
            return self._decode_success(pending, response)

        if status == 401:
            self._handle_unauthorized(pending)
            raise AuthRequired(
                self._readable_message(response) or "Autenticação necessária",
                url=pending.endpoint,
            )

        if status == 403:
            self._logger.aviso("Acesso negado", metodo=pending.method, endpoint=pending.endpoint)
            raise Forbidden(
                self._readable_message(response) or "Acesso negado",
                url=pending.endpoint,
            )

        message = self._structured_message(response) or f"HTTP {status}: {response.reason_phrase}"
        self._logger.erro(
            "Requisição falhou",
            metodo=pending.method,
            endpoint=pending.endpoint,
            status=status,
        )
        raise RequestFailed(status, message, url=pending.endpoint)

    def _decode_success(self, pending: PendingRequest, response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None

        content_type = response.headers.get("content-type", "")
        if "json" not in content_type.lower():
            return response.text

        try:
            return response.json()
        except ValueError as e:
            raise RequestFailed(
                response.status_code,
                "Resposta JSON inválida",
                url=pending.endpoint,
                cause=e,
            ) from e

    def _handle_unauthorized(self, pending: PendingRequest) -> None:
        self._logger.aviso("Sessão inválida ou expirada", endpoint=pending.endpoint)
        if self._session is not None:
            self._session.mark_unauthenticated()
        if self._navigator is not None:
            self._navigator.redirect_to_entry()

    @staticmethod
    def _json_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def _structured_message(self, response: httpx.Response) -> Optional[str]:
        data = self._json_body(response)
        if isinstance(data, dict):
            message = data.get("message")
            if isinstance(message, str) and message:
                return message
        return None

    def _readable_message(self, response: httpx.Response) -> Optional[str]:
        """Mensagem estruturada ou, para respostas text/plain, o próprio corpo."""
        message = self._structured_message(response)
        if message:
            return message
        if "text/plain" in response.headers.get("content-type", "").lower():
            return response.text.strip() or None
        return None

    def _error_texts(self, response: httpx.Response) -> List[str]:
        data = self._json_body(response)
        if isinstance(data, dict):
            textos = [str(data[k]) for k in ("message", "error") if data.get(k)]
            if textos:
                return textos
        return [response.text]


__all__ = ["RequestPipeline"]
