"""Interface do ponto único de saída das requisições HTTP."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class IRequestPipeline(ABC):
    """Contrato do pipeline que aplica token CSRF, classificação de erros e retry."""

    @abstractmethod
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
        Executa uma requisição e retorna o payload decodificado.

        Raises:
            NetworkFailure: Falha de transporte (status 0)
            AuthRequired: HTTP 401
            Forbidden: HTTP 403 persistente
            RequestFailed: Qualquer outro status não-2xx
        """
        ...


__all__ = ['IRequestPipeline']
