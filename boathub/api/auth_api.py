"""Cliente dos endpoints de autenticação."""

from __future__ import annotations

from typing import Optional

from boathub.core.config import ClientConfig
from boathub.interfaces.services import ILoggingService, IRequestPipeline
from boathub.schemas import LoginRequest, User

from .base_api import BaseAPIClient


class AuthAPI(BaseAPIClient):
    """Login, logout e consulta do usuário atual."""

    def __init__(
        self,
        pipeline: IRequestPipeline,
        config: Optional[ClientConfig] = None,
        logger: Optional[ILoggingService] = None,
    ):
        super().__init__(pipeline, logger)
        self._config = config or ClientConfig()

    async def login(self, username: str, password: str) -> User:
        payload = await self._request(
            "POST",
            self._config.login_path,
            LoginRequest(username=username, password=password),
        )
        return self._parse(User, payload, endpoint=self._config.login_path)

    async def logout(self) -> None:
        # O servidor responde com texto simples; o conteúdo é ignorado
        await self._request("POST", self._config.logout_path)

    async def get_current_user(self) -> User:
        payload = await self._request("GET", self._config.current_user_path)
        return self._parse(User, payload, endpoint=self._config.current_user_path)
