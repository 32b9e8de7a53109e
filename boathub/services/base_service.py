"""
Bases dos serviços do cliente.

Cada serviço recebe um logger com o próprio nome no contexto; serviços com
etapa assíncrona de aquecimento herdam de :class:`AsyncService`.
"""

from __future__ import annotations

from abc import ABC
from typing import Optional

from boathub.interfaces.services import ILoggingService


class BaseService(ABC):
    """Base dos serviços: guarda o logger contextual e o estado de inicialização."""

    def __init__(self, logger: Optional[ILoggingService] = None):
        base = logger or self._get_default_logger()
        self._logger = base.com_contexto(servico=self.__class__.__name__)
        self._initialized = False

    def _get_default_logger(self) -> ILoggingService:
        from boathub.core.logging import get_logger
        return get_logger()

    @property
    def logger(self) -> ILoggingService:
        return self._logger

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def __repr__(self) -> str:
        estado = "pronto" if self._initialized else "pendente"
        return f"{self.__class__.__name__}({estado})"


class AsyncService(BaseService):
    """Serviço com aquecimento assíncrono executado uma única vez."""

    async def initialize_async(self) -> None:
        """
        Executa ``_initialize_async_impl`` até a primeira conclusão bem-sucedida.

        Falhas são registradas e propagadas; a próxima chamada tenta de novo.
        """
        if self._initialized:
            return

        try:
            await self._initialize_async_impl()
        except Exception as e:
            self._logger.erro("Falha na inicialização", erro=e)
            raise

        self._initialized = True
        self._logger.debug("Serviço inicializado")

    async def _initialize_async_impl(self) -> None:
        """Ponto de extensão das subclasses."""
