"""Cliente do recurso de barcos (``/api/v1/boats``)."""

from __future__ import annotations

from typing import Optional

from boathub.core.config import ClientConfig
from boathub.core.logging import debug_log
from boathub.interfaces.services import ILoggingService, IRequestPipeline
from boathub.schemas import Boat, CreateBoatRequest, Page, Pageable, UpdateBoatRequest

from .base_api import BaseAPIClient


class BoatAPI(BaseAPIClient):
    """
    Operações CRUD de barcos.

    Não há lógica de protocolo aqui: token, cookies e erros ficam a cargo
    do pipeline.
    """

    def __init__(
        self,
        pipeline: IRequestPipeline,
        config: Optional[ClientConfig] = None,
        logger: Optional[ILoggingService] = None,
    ):
        super().__init__(pipeline, logger)
        self._base_endpoint = (config or ClientConfig()).boats_path.rstrip("/")

    def _item_endpoint(self, boat_id: int) -> str:
        return f"{self._base_endpoint}/{boat_id}"

    @debug_log(log_result=False)
    async def get_boats(self, pageable: Optional[Pageable] = None) -> Page[Boat]:
        """
        Lista barcos paginados.

        Args:
            pageable: Página, tamanho e ordenação (padrão: primeira página, 10 itens)

        Returns:
            Page[Boat]: Página de resultados
        """
        pageable = pageable or Pageable()
        endpoint = f"{self._base_endpoint}{self.build_query_string(pageable.to_query())}"
        payload = await self._request("GET", endpoint)
        return self._parse(Page[Boat], payload, endpoint=self._base_endpoint)

    async def get_boat_by_id(self, boat_id: int) -> Boat:
        payload = await self._request("GET", self._item_endpoint(boat_id))
        return self._parse(Boat, payload, boat_id=boat_id)

    async def create_boat(self, data: CreateBoatRequest) -> Boat:
        payload = await self._request("POST", self._base_endpoint, data)
        boat = self._parse(Boat, payload)
        self._logger.sucesso("Barco criado", boat_id=boat.id)
        return boat

    async def update_boat(self, boat_id: int, data: UpdateBoatRequest) -> Boat:
        """Atualização completa: todos os campos são reenviados."""
        payload = await self._request("PUT", self._item_endpoint(boat_id), data)
        return self._parse(Boat, payload, boat_id=boat_id)

    async def delete_boat(self, boat_id: int) -> None:
        await self._request("DELETE", self._item_endpoint(boat_id))
        self._logger.info("Barco removido", boat_id=boat_id)
