"""
Produtos API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the JSON envelopes of every endpoint.
How:   FastAPI parses request bodies into `ProdutoIn`, serializes handler
       results through the response models and documents both in OpenAPI.

Envelope conventions:
    Product endpoints:  {"success": true, ...}  /  {"success": false, "message"|"error"}
    Status endpoints:   {"status": "success" | "healthy" | "unhealthy", ...}

Design Decision:
    `ProdutoIn` is deliberately loose: every field is optional and untyped.
    Presence is checked by ProdutoService (400 on create); type and range
    checks are left to the database, which coerces or rejects the value.
"""

from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProdutoIn(BaseModel):
    """
    Body of POST /produtos and PUT /produtos/{id}.

    Unknown keys are ignored.
    """
    nome: Any = Field(default=None, description="Nome do produto (obrigatório na criação)")
    preco: Any = Field(default=None, description="Preço; repassado ao banco sem conversão")
    categoria: Any = Field(default=None, description="Categoria; 'Geral' se ausente na criação")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProdutoOut(BaseModel):
    """A stored product row as returned to clients."""
    id: int = Field(description="Identificador gerado pelo banco")
    nome: Optional[str] = None
    preco: Optional[float] = None
    categoria: Optional[str] = None

    model_config = {"from_attributes": True}


class ProdutoListResponse(BaseModel):
    """GET /produtos: every row ordered by id."""
    success: bool = True
    count: int = Field(description="Número de produtos retornados")
    produtos: List[ProdutoOut]


class ProdutoResponse(BaseModel):
    """GET /produtos/{id}."""
    success: bool = True
    produto: ProdutoOut


class ProdutoMutationResponse(BaseModel):
    """POST /produtos and PUT /produtos/{id}."""
    success: bool = True
    message: str
    produto: ProdutoOut


class MessageResponse(BaseModel):
    """DELETE /produtos/{id}, plus the 400/404 error envelopes."""
    success: bool
    message: str


class ErrorResponse(BaseModel):
    """Generic 500 envelope; never carries driver details."""
    success: bool = False
    error: str = "Erro interno do servidor"


# ══════════════════════════════════════════════════════════════════════════
# Status Models
# ══════════════════════════════════════════════════════════════════════════


class RootResponse(BaseModel):
    """GET / banner."""
    message: str
    status: str = "success"
    timestamp: str = Field(description="Hora do servidor (UTC, ISO 8601)")


class HealthResponse(BaseModel):
    """GET /health when the database answered."""
    status: str = "healthy"
    api: str
    database: str
    timestamp: Union[datetime, str] = Field(description="Hora reportada pelo banco")


class UnhealthyResponse(BaseModel):
    """GET /health when the database did not answer (HTTP 500)."""
    status: str = "unhealthy"
    api: str
    database: str
    error: str = Field(description="Mensagem de erro do driver, exposta de propósito")
