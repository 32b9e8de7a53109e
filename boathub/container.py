"""Container de injeção de dependências do cliente BoatHub."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type, TypeVar

import httpx

from boathub.api import AuthAPI, BoatAPI
from boathub.core.config import AppConfig, ClientConfig
from boathub.core.logging import log
from boathub.infrastructure.session import (
    NavigationCallback,
    Navigator,
    RequestPipeline,
    SessionState,
    TokenFetcher,
    TokenStore,
)
from boathub.interfaces.services import (
    ILoggingService,
    INavigator,
    IRequestPipeline,
    ISessionManager,
    ITokenProvider,
)

_T = TypeVar("_T")


@dataclass(slots=True)
class _Binding:
    factory: Callable[["SimpleInjector"], Any]
    instance: Any = None
    has_instance: bool = False


class SimpleInjector:
    """
    Container leve que monta uma instância isolada do cliente.

    Cada container tem seu próprio ``httpx.AsyncClient`` (e portanto seu
    próprio jar de cookies), TokenStore e sessão. O ``transport`` permite
    trocar a camada de rede, por exemplo por um ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        navigation_callback: Optional[NavigationCallback] = None,
    ) -> None:
        self._bindings: Dict[Any, _Binding] = {}
        self._config = config or AppConfig()
        self._transport = transport
        self._navigation_callback = navigation_callback
        self._registrar_bindings_padrao()

    def _registrar_bindings_padrao(self) -> None:
        self.bind_instance(AppConfig, self._config)
        self.bind_instance(ClientConfig, self._config.client)
        self.bind_singleton(ILoggingService, lambda inj: log)

        self.bind_singleton(httpx.AsyncClient, self._criar_http_client)
        self.bind_singleton(
            TokenStore,
            lambda inj: TokenStore(
                header_name=inj.get(ClientConfig).default_header_name,
                field_name=inj.get(ClientConfig).default_parameter_name,
            ),
        )
        self.bind_singleton(
            ITokenProvider,
            lambda inj: TokenFetcher(
                client=inj.get(httpx.AsyncClient),
                store=inj.get(TokenStore),
                config=inj.get(ClientConfig),
                logger=inj.get(ILoggingService),
            ),
        )
        self.bind_singleton(
            INavigator,
            lambda inj: Navigator(
                entry_path=inj.get(ClientConfig).entry_path,
                callback=self._navigation_callback,
                logger=inj.get(ILoggingService),
            ),
        )
        self.bind_singleton(
            IRequestPipeline,
            lambda inj: RequestPipeline(
                client=inj.get(httpx.AsyncClient),
                token_provider=inj.get(ITokenProvider),
                config=inj.get(ClientConfig),
                navigator=inj.get(INavigator),
                logger=inj.get(ILoggingService),
            ),
        )
        self.bind_singleton(
            AuthAPI,
            lambda inj: AuthAPI(
                inj.get(IRequestPipeline),
                config=inj.get(ClientConfig),
                logger=inj.get(ILoggingService),
            ),
        )
        self.bind_singleton(
            BoatAPI,
            lambda inj: BoatAPI(
                inj.get(IRequestPipeline),
                config=inj.get(ClientConfig),
                logger=inj.get(ILoggingService),
            ),
        )
        self.bind_singleton(ISessionManager, self._criar_sessao)

    def _criar_http_client(self, inj: "SimpleInjector") -> httpx.AsyncClient:
        client_config = inj.get(ClientConfig)
        return httpx.AsyncClient(
            base_url=client_config.normalized_base_url,
            timeout=client_config.timeout,
            headers=client_config.default_headers,
            transport=self._transport,
        )

    def _criar_sessao(self, inj: "SimpleInjector") -> SessionState:
        session = SessionState(
            auth_api=inj.get(AuthAPI),
            token_provider=inj.get(ITokenProvider),
            store=inj.get(TokenStore),
            logger=inj.get(ILoggingService),
        )
        # O pipeline sinaliza a sessão no 401
        inj.get(IRequestPipeline).bind_session(session)
        return session

    def bind_instance(self, chave: Type[_T], instancia: _T) -> None:
        self._bindings[chave] = _Binding(factory=lambda _: instancia, instance=instancia, has_instance=True)

    def bind_singleton(self, chave: Type[_T], fabrica: Callable[["SimpleInjector"], _T]) -> None:
        self._bindings[chave] = _Binding(factory=fabrica)

    def get(self, chave: Type[_T]) -> _T:
        if chave not in self._bindings:
            raise KeyError(f"Nenhum binding registrado para {chave!r}")
        binding = self._bindings[chave]
        if not binding.has_instance:
            binding.instance = binding.factory(self)
            binding.has_instance = True
        return binding.instance

    # ------------------------------------------------------------------
    # Atalhos
    # ------------------------------------------------------------------

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def session(self) -> ISessionManager:
        return self.get(ISessionManager)

    @property
    def pipeline(self) -> IRequestPipeline:
        # Garante a ligação pipeline -> sessão antes do primeiro uso
        self.get(ISessionManager)
        return self.get(IRequestPipeline)

    @property
    def boats(self) -> BoatAPI:
        self.get(ISessionManager)
        return self.get(BoatAPI)

    @property
    def tokens(self) -> ITokenProvider:
        return self.get(ITokenProvider)

    @property
    def token_store(self) -> TokenStore:
        return self.get(TokenStore)

    @property
    def navigator(self) -> INavigator:
        return self.get(INavigator)

    async def start(self) -> "SimpleInjector":
        """Liga os componentes e tenta obter o token CSRF (sem lançar em caso de falha)."""
        self.get(ISessionManager)
        await self.get(ITokenProvider).initialize()
        return self

    async def aclose(self) -> None:
        binding = self._bindings.get(httpx.AsyncClient)
        if binding is not None and binding.has_instance:
            await binding.instance.aclose()
            binding.instance = None
            binding.has_instance = False

    async def __aenter__(self) -> "SimpleInjector":
        return await self.start()

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def create_injector(
    config: AppConfig | None = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    navigation_callback: Optional[NavigationCallback] = None,
) -> SimpleInjector:
    """Cria o container padrão da aplicação."""
    return SimpleInjector(config, transport=transport, navigation_callback=navigation_callback)


__all__ = ["SimpleInjector", "create_injector"]
