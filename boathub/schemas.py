"""Schemas dos payloads trocados com a API BoatHub."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class WireModel(BaseModel):
    """Base dos schemas: campos em snake_case, JSON em camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """Serializa para o corpo JSON da requisição."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ==================== Segurança ====================

class CsrfTokenResponse(WireModel):
    """Resposta do endpoint de token CSRF."""

    token: str = Field(..., min_length=1, description="Valor do token anti-falsificação")
    header_name: Optional[str] = Field(None, description="Header em que o token deve ser enviado")
    parameter_name: Optional[str] = Field(None, description="Campo de formulário equivalente")


# ==================== Autenticação ====================

class LoginRequest(WireModel):
    username: str = Field(..., description="Usuário")
    password: str = Field(..., description="Senha")

    def __repr__(self) -> str:
        return f"LoginRequest(username={self.username!r}, password='***')"


class User(WireModel):
    """Usuário autenticado."""

    username: str
    authenticated: bool = True


class ErrorResponse(WireModel):
    """Corpo de erro estruturado devolvido pelo servidor."""

    message: Optional[str] = None
    error: Optional[str] = None
    timestamp: Optional[str] = None


# ==================== Barcos ====================

class BoatType(str, Enum):
    SAILBOAT = "SAILBOAT"
    MOTORBOAT = "MOTORBOAT"
    YACHT = "YACHT"
    SPEEDBOAT = "SPEEDBOAT"
    FISHING_BOAT = "FISHING_BOAT"
    OTHER = "OTHER"


class Boat(WireModel):
    id: int
    name: str
    description: Optional[str] = None
    boat_type: BoatType
    created_date: datetime
    updated_date: datetime


class CreateBoatRequest(WireModel):
    name: str = Field(..., description="Nome do barco")
    description: Optional[str] = Field(None, description="Descrição opcional")
    boat_type: BoatType = Field(..., description="Tipo do barco")


class UpdateBoatRequest(WireModel):
    """Atualização completa: nome, descrição e tipo são reenviados."""

    name: str
    description: Optional[str] = None
    boat_type: BoatType


# ==================== Paginação ====================

class Pageable(WireModel):
    page: int = Field(0, ge=0, description="Página (base zero)")
    size: int = Field(10, ge=1, description="Itens por página")
    sort_by: Optional[str] = Field(None, description="Campo de ordenação")
    sort_direction: Optional[Literal["asc", "desc"]] = None

    def to_query(self) -> dict:
        """Parâmetros de query na forma esperada pelo servidor."""
        return {
            "page": self.page,
            "size": self.size,
            "sortBy": self.sort_by,
            "sortDirection": self.sort_direction,
        }


class SortInfo(WireModel):
    sorted: bool = False
    unsorted: bool = True
    empty: bool = True


class Page(WireModel, Generic[T]):
    """Página de resultados no formato do Spring Data."""

    content: List[T] = Field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    number: int = 0
    size: int = 0
    first: bool = True
    last: bool = True
    number_of_elements: int = 0
    empty: bool = True
    sort: Optional[SortInfo] = None


__all__ = [
    "WireModel",
    "CsrfTokenResponse",
    "LoginRequest",
    "User",
    "ErrorResponse",
    "BoatType",
    "Boat",
    "CreateBoatRequest",
    "UpdateBoatRequest",
    "Pageable",
    "SortInfo",
    "Page",
]
