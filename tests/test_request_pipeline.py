"""Testes do RequestPipeline: headers de segurança, classificação e retry único."""

import json

import httpx
import pytest

from boathub.core.exceptions import (
    AuthRequired,
    Forbidden,
    NetworkFailure,
    ProtocolFailure,
    RequestFailed,
)
from boathub.domain.request import Attempt
from boathub.domain.session import Identity, Session
from boathub.domain.token import SecurityToken

from tests.fake_server import CSRF_MISMATCH, TOKEN_PATH, boat_json, fail, respond, token_payload

BOATS = "/api/v1/boats"


class TestSecurityHeaders:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
    async def test_mutating_request_carries_current_token(self, server, pipeline, store, method):
        store.set(SecurityToken(value="abc"))
        server.add(method, BOATS, respond(200, json={"ok": True}))

        await pipeline.request(BOATS, method, {"name": "Orca"})

        request = server.calls(method, BOATS)[0]
        assert request.headers["X-CSRF-TOKEN"] == "abc"
        assert server.calls("GET", TOKEN_PATH) == []

    @pytest.mark.asyncio
    async def test_missing_token_is_fetched_before_mutating_request(self, server, pipeline, store):
        server.add("GET", TOKEN_PATH, token_payload("abc", header="X-XSRF-TOKEN"))
        server.add("POST", BOATS, respond(201, json=boat_json()))

        await pipeline.request(BOATS, "POST", {"name": "Orca"})

        request = server.calls("POST", BOATS)[0]
        assert request.headers["X-XSRF-TOKEN"] == "abc"
        assert "X-CSRF-TOKEN" not in request.headers
        assert store.get().value == "abc"

    @pytest.mark.asyncio
    async def test_lowercase_method_is_treated_as_mutating(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("DELETE", f"{BOATS}/1", respond(204))

        await pipeline.request(f"{BOATS}/1", "delete")

        assert server.calls("DELETE", f"{BOATS}/1")[0].headers["X-CSRF-TOKEN"] == "abc"

    @pytest.mark.asyncio
    async def test_safe_request_never_carries_token(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("GET", BOATS, respond(200, json={"content": []}))

        await pipeline.request(BOATS)

        assert "X-CSRF-TOKEN" not in server.calls("GET", BOATS)[0].headers

    @pytest.mark.asyncio
    async def test_token_endpoint_is_exempt(self, server, pipeline):
        server.add("POST", TOKEN_PATH, respond(200, json={"token": "abc"}))

        await pipeline.request(TOKEN_PATH, "POST")

        request = server.calls("POST", TOKEN_PATH)[0]
        assert "X-CSRF-TOKEN" not in request.headers
        assert server.calls("GET", TOKEN_PATH) == []

    @pytest.mark.asyncio
    async def test_extra_headers_and_params_are_forwarded(self, server, pipeline):
        server.add("GET", BOATS, respond(200, json=[]))

        await pipeline.request(BOATS, extra_headers={"X-Trace": "t-1"}, params={"page": 2})

        request = server.calls("GET", BOATS)[0]
        assert request.headers["X-Trace"] == "t-1"
        assert request.url.params["page"] == "2"

    @pytest.mark.asyncio
    async def test_json_body_is_labelled_as_json(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("POST", BOATS, respond(201, json=boat_json()))

        await pipeline.request(BOATS, "POST", {"name": "Orca"})

        assert server.calls("POST", BOATS)[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_text_body_keeps_caller_content_type(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("POST", BOATS, respond(201, json=boat_json()))

        await pipeline.request(BOATS, "POST", "name=Orca", {"Content-Type": "text/plain"})

        request = server.calls("POST", BOATS)[0]
        assert request.headers["Content-Type"] == "text/plain"
        assert request.content == b"name=Orca"

    @pytest.mark.asyncio
    async def test_raw_body_is_not_labelled_as_json(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("POST", BOATS, respond(201, json=boat_json()))

        await pipeline.request(BOATS, "POST", b"\x00\x01")

        assert "Content-Type" not in server.calls("POST", BOATS)[0].headers

    @pytest.mark.asyncio
    async def test_token_fetch_errors_propagate(self, server, pipeline):
        server.add("GET", TOKEN_PATH, respond(500))

        with pytest.raises(ProtocolFailure):
            await pipeline.request(BOATS, "POST", {"name": "Orca"})

        assert server.calls("POST", BOATS) == []


class TestSuccessDecoding:

    @pytest.mark.asyncio
    async def test_json_payload_is_decoded(self, server, pipeline):
        server.add("GET", f"{BOATS}/1", respond(200, json=boat_json()))

        assert await pipeline.request(f"{BOATS}/1") == boat_json()

    @pytest.mark.asyncio
    async def test_no_content_is_empty_result(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("DELETE", f"{BOATS}/1", respond(204))

        assert await pipeline.request(f"{BOATS}/1", "DELETE") is None

    @pytest.mark.asyncio
    async def test_zero_length_body_is_empty_result(self, server, pipeline):
        server.add("GET", BOATS, respond(200, content=b"", headers={"Content-Type": "application/json"}))

        assert await pipeline.request(BOATS) is None

    @pytest.mark.asyncio
    async def test_plain_text_payload_is_returned_as_text(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("POST", "/api/auth/logout", respond(200, text="Logged out successfully"))

        assert await pipeline.request("/api/auth/logout", "POST") == "Logged out successfully"

    @pytest.mark.asyncio
    async def test_malformed_json_is_request_failed(self, server, pipeline):
        server.add("GET", BOATS, respond(200, content=b"{nope", headers={"Content-Type": "application/json"}))

        with pytest.raises(RequestFailed) as exc_info:
            await pipeline.request(BOATS)

        assert exc_info.value.status == 200


class TestAuthorizationFailure:

    @pytest.mark.asyncio
    async def test_401_marks_session_and_redirects(self, server, pipeline, session_state, navigator, navigations, store):
        session_state._session = Session(user=Identity("admin"), authenticated=True)
        store.set(SecurityToken(value="abc"))
        server.add("GET", BOATS, respond(401, json={"message": "Sessão expirada"}))

        with pytest.raises(AuthRequired) as exc_info:
            await pipeline.request(BOATS)

        assert exc_info.value.status == 401
        assert str(exc_info.value.message) == "Sessão expirada"
        assert not session_state.is_authenticated
        assert session_state.username is None
        assert navigator.current_path == "/"
        assert navigations == ["/"]

    @pytest.mark.asyncio
    async def test_401_never_refreshes_or_retries(self, server, pipeline, store, fetcher):
        store.set(SecurityToken(value="abc"))
        server.add("POST", BOATS, respond(401, text="Unauthorized"))

        with pytest.raises(AuthRequired):
            await pipeline.request(BOATS, "POST", {"name": "Orca"})

        assert len(server.calls("POST", BOATS)) == 1
        assert len(server.calls("GET", TOKEN_PATH)) == 0
        assert store.get().value == "abc"

    @pytest.mark.asyncio
    async def test_no_redirect_when_already_on_entry_page(self, server, pipeline, navigator, navigations):
        navigator.navigate("/")
        navigations.clear()
        server.add("GET", BOATS, respond(401))

        with pytest.raises(AuthRequired):
            await pipeline.request(BOATS)

        assert navigations == []


class TestTokenMismatchRetry:

    @pytest.mark.asyncio
    async def test_mismatch_refreshes_and_retries_once(self, server, pipeline, store, fetcher):
        store.set(SecurityToken(value="abc"))
        server.add("GET", TOKEN_PATH, token_payload("xyz"))
        server.add("POST", BOATS, CSRF_MISMATCH, respond(201, json=boat_json()))

        result = await pipeline.request(BOATS, "POST", {"name": "Orca"}, {"X-Trace": "t-1"})

        assert result == boat_json()
        first, retry = server.calls("POST", BOATS)
        assert first.headers["X-CSRF-TOKEN"] == "abc"
        assert retry.headers["X-CSRF-TOKEN"] == "xyz"
        assert json.loads(first.content) == json.loads(retry.content) == {"name": "Orca"}
        assert retry.headers["X-Trace"] == "t-1"
        assert len(server.calls("GET", TOKEN_PATH)) == 1

    @pytest.mark.asyncio
    async def test_second_mismatch_is_forbidden_without_third_attempt(self, server, pipeline, store, fetcher):
        store.set(SecurityToken(value="abc"))
        server.add("GET", TOKEN_PATH, token_payload("xyz"))
        server.add("POST", BOATS, CSRF_MISMATCH)

        with pytest.raises(Forbidden) as exc_info:
            await pipeline.request(BOATS, "POST", {"name": "Orca"})

        assert exc_info.value.status == 403
        assert len(server.calls("POST", BOATS)) == 2
        assert len(server.calls("GET", TOKEN_PATH)) == 1

    @pytest.mark.asyncio
    async def test_plain_403_is_forbidden_without_retry(self, server, pipeline, store, fetcher):
        store.set(SecurityToken(value="abc"))
        server.add("DELETE", f"{BOATS}/1", respond(403, json={"message": "Access Denied"}))

        with pytest.raises(Forbidden) as exc_info:
            await pipeline.request(f"{BOATS}/1", "DELETE")

        assert exc_info.value.message == "Access Denied"
        assert len(server.calls("DELETE", f"{BOATS}/1")) == 1
        assert len(server.calls("GET", TOKEN_PATH)) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("responder", [
        respond(403, json={"message": "invalid csrf token"}),
        respond(403, json={"error": "CSRF token missing"}),
        respond(403, text="Could not verify the provided CSRF token"),
    ])
    async def test_mismatch_detection_variants(self, server, pipeline, store, responder):
        store.set(SecurityToken(value="abc"))
        server.add("GET", TOKEN_PATH, token_payload("xyz"))
        server.add("PUT", f"{BOATS}/1", responder, respond(200, json=boat_json()))

        assert await pipeline.request(f"{BOATS}/1", "PUT", {"name": "Orca"}) == boat_json()
        assert len(server.calls("PUT", f"{BOATS}/1")) == 2

    @pytest.mark.asyncio
    async def test_retry_answering_401_follows_authorization_path(self, server, pipeline, store, navigations):
        store.set(SecurityToken(value="abc"))
        server.add("GET", TOKEN_PATH, token_payload("xyz"))
        server.add("POST", BOATS, CSRF_MISMATCH, respond(401))

        with pytest.raises(AuthRequired):
            await pipeline.request(BOATS, "POST", {"name": "Orca"})

        assert navigations == ["/"]
        assert len(server.calls("POST", BOATS)) == 2

    @pytest.mark.asyncio
    async def test_failed_refresh_is_forbidden(self, server, pipeline, store):
        store.set(SecurityToken(value="abc"))
        server.add("GET", TOKEN_PATH, respond(500))
        server.add("POST", BOATS, CSRF_MISMATCH)

        with pytest.raises(Forbidden) as exc_info:
            await pipeline.request(BOATS, "POST", {"name": "Orca"})

        assert isinstance(exc_info.value.cause, ProtocolFailure)
        assert len(server.calls("POST", BOATS)) == 1

    def test_attempt_steps_allow_a_single_retry(self, pipeline):
        assert pipeline.next_attempt(Attempt.FIRST) is Attempt.RETRY
        assert pipeline.next_attempt(Attempt.RETRY) is None


class TestOtherFailures:

    @pytest.mark.asyncio
    async def test_structured_message_is_used(self, server, pipeline):
        server.add("GET", f"{BOATS}/99", respond(404, json={"message": "Boat not found", "error": "Not Found"}))

        with pytest.raises(RequestFailed) as exc_info:
            await pipeline.request(f"{BOATS}/99")

        assert exc_info.value.status == 404
        assert exc_info.value.message == "Boat not found"

    @pytest.mark.asyncio
    async def test_generic_status_line_without_structured_body(self, server, pipeline):
        server.add("GET", BOATS, respond(500, text="stack trace"))

        with pytest.raises(RequestFailed) as exc_info:
            await pipeline.request(BOATS)

        assert exc_info.value.status == 500
        assert exc_info.value.message == "HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc_class", [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError])
    async def test_transport_errors_become_network_failure(self, server, pipeline, exc_class):
        server.add("GET", BOATS, fail(exc_class))

        with pytest.raises(NetworkFailure) as exc_info:
            await pipeline.request(BOATS)

        assert exc_info.value.status == 0
        assert isinstance(exc_info.value.cause, exc_class)


class TestCreateBoatScenario:

    @pytest.mark.asyncio
    async def test_create_survives_rotated_token(self, server, pipeline, store):
        server.add("GET", TOKEN_PATH, token_payload("abc"), token_payload("xyz"))
        server.add("POST", BOATS, CSRF_MISMATCH, respond(201, json=boat_json(name="Orca")))

        result = await pipeline.request(BOATS, "POST", {"name": "Orca"})

        first, retry = server.calls("POST", BOATS)
        assert first.headers["X-CSRF-TOKEN"] == "abc"
        assert retry.headers["X-CSRF-TOKEN"] == "xyz"
        assert result["name"] == "Orca"
        assert store.get().value == "xyz"
