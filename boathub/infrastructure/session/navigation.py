"""Colaborador de navegação usado no redirecionamento após HTTP 401."""

from __future__ import annotations

from typing import Callable, Optional

from boathub.interfaces.services import ILoggingService, INavigator
from boathub.services.base_service import BaseService

NavigationCallback = Callable[[str], None]


class Navigator(BaseService, INavigator):
    """
    Mantém a página atual e executa o redirecionamento para a página de entrada.

    Sem callback, o redirecionamento apenas atualiza ``current_path`` e
    registra o evento; aplicações com interface própria injetam o callback.
    """

    def __init__(
        self,
        entry_path: str = "/",
        callback: Optional[NavigationCallback] = None,
        current_path: Optional[str] = None,
        logger: Optional[ILoggingService] = None,
    ) -> None:
        super().__init__(logger)
        self.entry_path = entry_path
        self._callback = callback
        self._current_path = current_path

    @property
    def current_path(self) -> Optional[str]:
        return self._current_path

    def navigate(self, path: str) -> None:
        self._current_path = path
        if self._callback is not None:
            self._callback(path)

    def redirect_to_entry(self) -> bool:
        if self._current_path == self.entry_path:
            self._logger.debug("Já na página de entrada, redirecionamento ignorado")
            return False

        self._logger.info("Redirecionando para a página de entrada", destino=self.entry_path)
        self.navigate(self.entry_path)
        return True


__all__ = ["Navigator", "NavigationCallback"]
