"""Fixtures compartilhadas dos testes."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from boathub.api import AuthAPI, BoatAPI
from boathub.core.config import ClientConfig
from boathub.core.logging import BoathubLogger, LoggerConfig
from boathub.infrastructure.session import (
    Navigator,
    RequestPipeline,
    SessionState,
    TokenFetcher,
    TokenStore,
)

from tests.fake_server import BASE_URL, FakeServer


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def quiet_logger() -> BoathubLogger:
    return BoathubLogger(LoggerConfig(nivel_minimo="CRITICAL", usar_cores=False, mostrar_tempo=False))


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL)


@pytest_asyncio.fixture
async def http_client(server: FakeServer, client_config: ClientConfig):
    client = httpx.AsyncClient(
        base_url=client_config.base_url,
        headers=client_config.default_headers,
        transport=httpx.MockTransport(server.handler),
    )
    yield client
    await client.aclose()


@pytest.fixture
def store() -> TokenStore:
    return TokenStore()


@pytest.fixture
def fetcher(http_client, store, client_config, quiet_logger) -> TokenFetcher:
    return TokenFetcher(http_client, store, client_config, logger=quiet_logger)


@pytest.fixture
def navigations() -> list:
    return []


@pytest.fixture
def navigator(navigations, quiet_logger) -> Navigator:
    return Navigator(
        entry_path="/",
        callback=navigations.append,
        current_path="/boats",
        logger=quiet_logger,
    )


@pytest.fixture
def pipeline(http_client, fetcher, client_config, navigator, quiet_logger) -> RequestPipeline:
    return RequestPipeline(
        http_client,
        fetcher,
        config=client_config,
        navigator=navigator,
        logger=quiet_logger,
    )


@pytest.fixture
def auth_api(pipeline, client_config, quiet_logger) -> AuthAPI:
    return AuthAPI(pipeline, config=client_config, logger=quiet_logger)


@pytest.fixture
def boat_api(pipeline, client_config, quiet_logger) -> BoatAPI:
    return BoatAPI(pipeline, config=client_config, logger=quiet_logger)


@pytest.fixture
def session_state(auth_api, fetcher, store, pipeline, quiet_logger) -> SessionState:
    state = SessionState(auth_api, fetcher, store, logger=quiet_logger)
    pipeline.bind_session(state)
    return state
