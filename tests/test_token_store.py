"""Testes do TokenStore e do modelo SecurityToken."""

import pytest

from boathub.domain.token import SecurityToken
from boathub.infrastructure.session import TokenStore, get_token_store, reset_token_store


class TestTokenStore:

    def test_starts_without_value_and_with_default_names(self):
        store = TokenStore()
        token = store.get()

        assert token.value is None
        assert token.header_name == "X-CSRF-TOKEN"
        assert token.field_name == "_csrf"
        assert not store.has_token

    def test_set_replaces_value_and_names_together(self):
        store = TokenStore()
        store.set(SecurityToken(value="abc", header_name="X-XSRF-TOKEN", field_name="_xsrf"))

        token = store.get()
        assert (token.value, token.header_name, token.field_name) == ("abc", "X-XSRF-TOKEN", "_xsrf")
        assert store.has_token

    def test_clear_keeps_server_configured_names(self):
        store = TokenStore()
        store.set(SecurityToken(value="abc", header_name="X-XSRF-TOKEN", field_name="_xsrf"))

        store.clear()

        token = store.get()
        assert token.value is None
        assert token.header_name == "X-XSRF-TOKEN"
        assert token.field_name == "_xsrf"

    def test_clear_advances_generation(self):
        store = TokenStore()
        inicial = store.generation

        store.set(SecurityToken(value="abc"))
        assert store.generation == inicial

        store.clear()
        assert store.generation == inicial + 1

    def test_set_if_current_rejects_writes_started_before_clear(self):
        store = TokenStore()
        geracao = store.generation
        store.clear()

        assert store.set_if_current(SecurityToken(value="late"), geracao) is False
        assert not store.has_token

        assert store.set_if_current(SecurityToken(value="fresh"), store.generation) is True
        assert store.get().value == "fresh"

    def test_get_has_no_side_effects(self):
        store = TokenStore()
        store.set(SecurityToken(value="abc"))

        assert store.get() is store.get()

    def test_token_value_not_in_repr(self):
        store = TokenStore()
        store.set(SecurityToken(value="super-secret"))

        assert "super-secret" not in repr(store)
        assert "super-secret" not in repr(store.get())

    def test_as_header_is_empty_without_value(self):
        assert SecurityToken().as_header() == {}
        assert SecurityToken(value="abc").as_header() == {"X-CSRF-TOKEN": "abc"}

    def test_token_is_immutable(self):
        token = SecurityToken(value="abc")
        with pytest.raises(AttributeError):
            token.value = "xyz"


class TestDefaultStore:

    def test_get_token_store_returns_same_instance(self):
        assert get_token_store() is get_token_store()

    def test_reset_creates_fresh_store(self):
        store = get_token_store()
        store.set(SecurityToken(value="abc"))

        novo = reset_token_store()

        assert novo is not store
        assert not novo.has_token
        assert get_token_store() is novo
