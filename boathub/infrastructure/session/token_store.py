"""
Armazenamento do token anti-falsificação.

O token é trocado sempre como uma instância inteira de ``SecurityToken``,
assim valor e nomes de header/campo nunca ficam fora de sincronia.
"""

from __future__ import annotations

from typing import Optional

from boathub.domain.token import DEFAULT_FIELD_NAME, DEFAULT_HEADER_NAME, SecurityToken


class TokenStore:
    """
    Detentor do token CSRF atual.

    Não faz I/O e não lança erros. A instância padrão do processo é obtida
    com :func:`get_token_store`; testes e containers criam instâncias próprias.

    ``generation`` avança a cada ``clear()``. Quem busca um token anota a
    geração no início e só grava com :meth:`set_if_current`, então uma busca
    iniciada antes de um logout não devolve o token ao store.
    """

    def __init__(
        self,
        header_name: str = DEFAULT_HEADER_NAME,
        field_name: str = DEFAULT_FIELD_NAME,
    ) -> None:
        self._token = SecurityToken(value=None, header_name=header_name, field_name=field_name)
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def get(self) -> SecurityToken:
        return self._token

    def set(self, token: SecurityToken) -> None:
        self._token = token

    def set_if_current(self, token: SecurityToken, generation: int) -> bool:
        """Grava o token apenas se nenhum ``clear()`` ocorreu desde ``generation``."""
        if generation != self._generation:
            return False
        self._token = token
        return True

    def clear(self) -> None:
        """Remove o valor mantendo os nomes configurados pelo servidor."""
        self._token = self._token.without_value()
        self._generation += 1

    @property
    def has_token(self) -> bool:
        return self._token.has_value

    def __repr__(self) -> str:
        return (
            f"TokenStore(header_name={self._token.header_name!r}, "
            f"has_token={self.has_token})"
        )


_default_store: Optional[TokenStore] = None


def get_token_store() -> TokenStore:
    """Retorna o TokenStore padrão do processo, criando-o na primeira chamada."""
    global _default_store
    if _default_store is None:
        _default_store = TokenStore()
    return _default_store


def reset_token_store() -> TokenStore:
    """Descarta o TokenStore padrão e cria um novo com os nomes padrão."""
    global _default_store
    _default_store = TokenStore()
    return _default_store


__all__ = ["TokenStore", "get_token_store", "reset_token_store"]
