"""Testes de integração do container com o servidor simulado."""

import httpx
import pytest

from boathub import create_injector
from boathub.core.config import AppConfig, ClientConfig
from boathub.core.exceptions import AuthRequired
from boathub.domain.session import SessionStatus
from boathub.schemas import BoatType, CreateBoatRequest

from tests.fake_server import BASE_URL, CSRF_MISMATCH, TOKEN_PATH, FakeServer, boat_json, respond, token_payload


def make_container(server: FakeServer, destinos=None):
    config = AppConfig(client=ClientConfig(base_url=BASE_URL))
    callback = destinos.append if destinos is not None else None
    return create_injector(
        config,
        transport=httpx.MockTransport(server.handler),
        navigation_callback=callback,
    )


class TestContainer:

    @pytest.mark.asyncio
    async def test_start_warms_up_token(self):
        server = FakeServer().add("GET", TOKEN_PATH, token_payload("abc"))

        async with make_container(server) as container:
            assert container.token_store.get().value == "abc"

    @pytest.mark.asyncio
    async def test_start_tolerates_unreachable_server(self):
        server = FakeServer().add("GET", TOKEN_PATH, respond(503))

        async with make_container(server) as container:
            assert not container.token_store.has_token

    @pytest.mark.asyncio
    async def test_full_session_flow(self):
        server = (
            FakeServer()
            .add("GET", TOKEN_PATH, token_payload("t1"), token_payload("t2"), token_payload("t3"))
            .add("POST", "/api/auth/login", respond(
                200,
                json={"username": "admin", "authenticated": True},
                headers={"Set-Cookie": "JSESSIONID=s1; Path=/"},
            ))
            .add("POST", "/api/v1/boats", CSRF_MISMATCH, respond(201, json=boat_json(9)))
            .add("POST", "/api/auth/logout", respond(200, text="Logged out successfully"))
        )

        async with make_container(server) as container:
            assert await container.session.login("admin", "secret")
            assert container.token_store.get().value == "t2"

            boat = await container.boats.create_boat(
                CreateBoatRequest(name="Orca", boat_type=BoatType.SAILBOAT)
            )
            assert boat.id == 9

            first, retry = server.calls("POST", "/api/v1/boats")
            assert first.headers["X-CSRF-TOKEN"] == "t2"
            assert retry.headers["X-CSRF-TOKEN"] == "t3"
            assert "JSESSIONID=s1" in retry.headers["cookie"]

            await container.session.logout()
            assert container.session.status is SessionStatus.UNAUTHENTICATED
            assert not container.token_store.has_token

    @pytest.mark.asyncio
    async def test_401_reaches_session_and_navigation(self):
        destinos = []
        server = (
            FakeServer()
            .add("GET", TOKEN_PATH, token_payload("abc"))
            .add("GET", "/api/auth/user", respond(200, json={"username": "admin", "authenticated": True}))
            .add("GET", "/api/v1/boats", respond(401))
        )

        async with make_container(server, destinos) as container:
            assert await container.session.check_auth()

            with pytest.raises(AuthRequired):
                await container.boats.get_boats()

            assert container.session.status is SessionStatus.UNAUTHENTICATED
            assert destinos == ["/"]

    @pytest.mark.asyncio
    async def test_containers_are_isolated(self):
        server = FakeServer().add("GET", TOKEN_PATH, token_payload("abc"))

        async with make_container(server) as primeiro:
            segundo = make_container(server)
            assert segundo.token_store is not primeiro.token_store
            assert not segundo.token_store.has_token
            await segundo.aclose()
