"""
Classe base para clientes de API.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Mapping, Optional, Type, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel, ValidationError

from boathub.core.exceptions import ResponseParsingException, wrap_exception
from boathub.interfaces.services import ILoggingService, IRequestPipeline

M = TypeVar("M", bound=BaseModel)


class BaseAPIClient(ABC):
    """
    Classe base para clientes de API.

    As requisições passam sempre pelo ``IRequestPipeline``, que cuida do
    token CSRF, dos cookies da sessão e da classificação de erros. Os
    clientes concretos só montam endpoints e convertem payloads em schemas.
    """

    def __init__(
        self,
        pipeline: IRequestPipeline,
        logger: Optional[ILoggingService] = None,
    ):
        self._pipeline = pipeline
        self._logger = (logger or self._get_logger()).com_contexto(api=self.__class__.__name__)

    def _get_logger(self) -> ILoggingService:
        from boathub.core.logging import get_logger
        return get_logger()

    @property
    def logger(self) -> ILoggingService:
        return self._logger

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Executa requisição através do pipeline.

        Returns:
            Any: JSON da resposta ou None para respostas vazias
        """
        return await self._pipeline.request(
            endpoint,
            method=method,
            body=body,
            extra_headers=headers,
            params=params,
        )

    def _parse(self, model: Type[M], payload: Any, **context: Any) -> M:
        """
        Valida o payload contra o schema esperado.

        Raises:
            ResponseParsingException: Payload ausente ou incompatível
        """
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            self._logger.erro("Resposta fora do formato esperado", schema=model.__name__, **context)
            raise wrap_exception(
                e,
                ResponseParsingException,
                f"Resposta inválida para {model.__name__}",
                erros=e.error_count(),
                **context,
            ) from e

    @staticmethod
    def build_query_string(params: Mapping[str, Any]) -> str:
        """
        Monta a query string ignorando valores ``None`` e strings vazias.

        Returns:
            str: ``?chave=valor&...`` ou string vazia
        """
        filtered = {
            key: (str(value).lower() if isinstance(value, bool) else value)
            for key, value in params.items()
            if value is not None and value != ""
        }
        query = urlencode(filtered)
        return f"?{query}" if query else ""
