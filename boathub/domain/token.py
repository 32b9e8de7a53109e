"""Modelo de domínio do token anti-falsificação (CSRF)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

DEFAULT_HEADER_NAME = "X-CSRF-TOKEN"
DEFAULT_FIELD_NAME = "_csrf"


@dataclass(frozen=True, slots=True)
class SecurityToken:
    """
    Token anti-falsificação com os nomes de header e campo configurados no servidor.

    Imutável: o TokenStore troca a instância inteira, de modo que valor e nomes
    nunca são observados fora de sincronia.

    Attributes:
        value: Valor opaco do token (``None`` quando ausente)
        header_name: Header em que o token deve ser enviado
        field_name: Nome do campo de formulário equivalente
    """

    value: Optional[str] = field(default=None, repr=False)
    header_name: str = DEFAULT_HEADER_NAME
    field_name: str = DEFAULT_FIELD_NAME

    @property
    def has_value(self) -> bool:
        return bool(self.value)

    def without_value(self) -> SecurityToken:
        """Cópia sem o valor, preservando os nomes (configuração do servidor)."""
        return replace(self, value=None)

    def as_header(self) -> dict[str, str]:
        """Header pronto para ser anexado; vazio quando não há valor."""
        if not self.value:
            return {}
        return {self.header_name: self.value}


__all__ = ["SecurityToken", "DEFAULT_HEADER_NAME", "DEFAULT_FIELD_NAME"]
