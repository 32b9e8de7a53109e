"""Interface do colaborador de navegação."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional


class INavigator(ABC):
    """Redireciona o usuário para a página de entrada quando a sessão expira."""

    entry_path: str

    @property
    @abstractmethod
    def current_path(self) -> Optional[str]:
        ...

    @abstractmethod
    def navigate(self, path: str) -> None:
        ...

    @abstractmethod
    def redirect_to_entry(self) -> bool:
        """
        Redireciona para a página de entrada.

        Returns:
            bool: False quando já estava na página de entrada
        """
        ...


__all__ = ['INavigator']
