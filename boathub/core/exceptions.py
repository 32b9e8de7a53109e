"""Sistema centralizado de exceções customizadas do cliente BoatHub."""

from __future__ import annotations
from typing import Any, Optional


class BoathubBaseException(Exception):
    """Exceção base para todas as exceções customizadas do BoatHub."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            base = f"{base} ({details_str})"
        if self.cause:
            base = f"{base} | Causa: {self.cause}"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# ==================== Exceções de Rede ====================

class NetworkException(BoathubBaseException):
    """Exceção base para erros relacionados à rede."""
    pass


class NetworkFailure(NetworkException):
    """
    Falha de transporte (DNS, conexão recusada, timeout, abort).

    Sempre carrega ``status == 0``, já que nenhuma resposta HTTP foi recebida.
    """

    status = 0

    def __init__(self, message: str = "Erro de rede", *, details: Optional[dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, details={"status": 0, **(details or {})}, cause=cause)


# ==================== Exceções HTTP ====================

class HttpStatusException(BoathubBaseException):
    """Resposta HTTP não-2xx recebida do servidor."""

    def __init__(self, status: int, message: str, *, url: Optional[str] = None, cause: Optional[BaseException] = None):
        self.status = status
        self.url = url
        details: dict[str, Any] = {"status": status}
        if url:
            details["url"] = url
        super().__init__(message, details=details, cause=cause)


class RequestFailed(HttpStatusException):
    """Qualquer falha não-2xx que não seja 401/403."""
    pass


class AuthRequired(HttpStatusException):
    """Sessão inválida ou expirada (HTTP 401)."""

    def __init__(self, message: str = "Autenticação necessária", *, url: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(401, message, url=url, cause=cause)


class Forbidden(HttpStatusException):
    """Acesso negado (HTTP 403) persistente após no máximo uma renovação do token."""

    def __init__(self, message: str = "Acesso negado", *, url: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(403, message, url=url, cause=cause)


# ==================== Exceções de Sessão ====================

class SessionException(BoathubBaseException):
    """Exceção base para erros de sessão."""
    pass


class TokenException(SessionException):
    """Erro relacionado ao token anti-falsificação."""
    pass


class ProtocolFailure(TokenException):
    """Resposta do endpoint de token malformada (não-2xx, sem JSON ou sem token)."""
    pass


# ==================== Exceções de Parsing ====================

class ParsingException(BoathubBaseException):
    """Exceção base para erros de parsing."""
    pass


class ResponseParsingException(ParsingException):
    """Payload da API não corresponde ao modelo esperado."""
    pass


# ==================== Exceções de Configuração ====================

class ConfigurationException(BoathubBaseException):
    """Exceção base para erros de configuração."""
    pass


class InvalidConfigException(ConfigurationException):
    """Configuração inválida."""
    pass


# ==================== Helpers ====================

def wrap_exception(exc: BaseException, wrapper_class: type[BoathubBaseException], message: str, **details: Any) -> BoathubBaseException:
    """
    Envolve uma exceção existente em uma exceção customizada.

    Args:
        exc: Exceção original
        wrapper_class: Classe da exceção customizada
        message: Mensagem descritiva
        **details: Detalhes adicionais

    Returns:
        Instância da exceção customizada
    """
    return wrapper_class(message, details=details, cause=exc)


__all__ = [
    # Base
    "BoathubBaseException",
    # Network
    "NetworkException",
    "NetworkFailure",
    # HTTP
    "HttpStatusException",
    "RequestFailed",
    "AuthRequired",
    "Forbidden",
    # Session
    "SessionException",
    "TokenException",
    "ProtocolFailure",
    # Parsing
    "ParsingException",
    "ResponseParsingException",
    # Configuration
    "ConfigurationException",
    "InvalidConfigException",
    # Helpers
    "wrap_exception",
]
