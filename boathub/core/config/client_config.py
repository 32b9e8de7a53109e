"""
Configuração do cliente HTTP.

Define a URL do servidor, timeouts, caminhos dos endpoints e os nomes
padrão usados pelo token anti-falsificação.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from boathub.core.exceptions import InvalidConfigException
from boathub.domain.token import DEFAULT_FIELD_NAME, DEFAULT_HEADER_NAME

from .base import BaseConfig


def _default_headers() -> Dict[str, str]:
    return {
        "Accept": "application/json",
    }


@dataclass(repr=False)
class ClientConfig(BaseConfig):
    """
    Configuração do cliente da API BoatHub.

    Attributes:
        base_url: URL base do servidor
        timeout: Timeout das requisições (segundos)
        default_headers: Headers enviados em todas as requisições
        csrf_token_path: Endpoint que emite o token CSRF
        login_path: Endpoint de login
        logout_path: Endpoint de logout
        current_user_path: Endpoint do usuário atual
        boats_path: Recurso de barcos
        entry_path: Página de entrada para onde o usuário é redirecionado no 401
        default_header_name: Header usado antes da primeira busca do token
        default_parameter_name: Campo de formulário usado antes da primeira busca
        token_mismatch_markers: Trechos que identificam um 403 de token inválido
    """

    base_url: str = "http://localhost:8080"
    timeout: float = 10.0
    default_headers: Dict[str, str] = field(default_factory=_default_headers)

    # Endpoints
    csrf_token_path: str = "/api/csrf-token"
    login_path: str = "/api/auth/login"
    logout_path: str = "/api/auth/logout"
    current_user_path: str = "/api/auth/user"
    boats_path: str = "/api/v1/boats"
    entry_path: str = "/"

    # Token CSRF
    default_header_name: str = DEFAULT_HEADER_NAME
    default_parameter_name: str = DEFAULT_FIELD_NAME
    token_mismatch_markers: List[str] = field(default_factory=lambda: ["CSRF"])

    def _validate_specific(self) -> None:
        if not self.base_url.startswith(('http://', 'https://')):
            raise InvalidConfigException("base_url deve começar com http:// ou https://")

        if self.timeout <= 0:
            raise InvalidConfigException("timeout deve ser > 0")

        for field_name in ('csrf_token_path', 'login_path', 'logout_path',
                           'current_user_path', 'boats_path', 'entry_path'):
            if not getattr(self, field_name).startswith('/'):
                raise InvalidConfigException(f"{field_name} deve começar com /")

        if not self.default_header_name or not self.default_parameter_name:
            raise InvalidConfigException("Nomes padrão do token CSRF não podem ser vazios")

        if not any(marker.strip() for marker in self.token_mismatch_markers):
            raise InvalidConfigException("token_mismatch_markers precisa de ao menos um valor")

    @property
    def normalized_base_url(self) -> str:
        """URL base sem barra final."""
        return self.base_url.rstrip('/')
