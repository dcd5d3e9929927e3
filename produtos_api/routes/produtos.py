"""
Produtos API — Product Route Handlers
======================================

What:  CRUD endpoints over /produtos.
How:   Extracts path/body data, delegates to ProdutoService, wraps the result
       in the success envelope. Failures are exceptions handled globally in
       main.py (400 / 404 / 500 envelopes).

Endpoints:
    GET    /produtos        → 200 {success, count, produtos}
    GET    /produtos/{id}   → 200 {success, produto}
    POST   /produtos        → 201 {success, message, produto}
    PUT    /produtos/{id}   → 200 {success, message, produto}
    DELETE /produtos/{id}   → 200 {success, message}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from produtos_api.database import get_db_session
from produtos_api.schemas.produto import (
    ErrorResponse,
    MessageResponse,
    ProdutoIn,
    ProdutoListResponse,
    ProdutoMutationResponse,
    ProdutoResponse,
)
from produtos_api.services.produto_service import produto_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/produtos", tags=["Produtos"])

_NOT_FOUND = {404: {"description": "Produto não encontrado", "model": MessageResponse}}
_SERVER_ERROR = {500: {"description": "Erro interno", "model": ErrorResponse}}


@router.get(
    "",
    response_model=ProdutoListResponse,
    responses={**_SERVER_ERROR},
    summary="Listar todos os produtos",
)
async def list_produtos(
    db: AsyncSession = Depends(get_db_session),
) -> ProdutoListResponse:
    produtos = await produto_service.list_produtos(db)
    return ProdutoListResponse(count=len(produtos), produtos=produtos)


@router.get(
    "/{produto_id}",
    response_model=ProdutoResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Buscar produto por ID",
)
async def get_produto(
    produto_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProdutoResponse:
    """
    Args:
        produto_id: Kept as a string; the database decides whether it is a
                    valid integer id.
    """
    produto = await produto_service.get_produto(db, produto_id)
    return ProdutoResponse(produto=produto)


@router.post(
    "",
    status_code=201,
    response_model=ProdutoMutationResponse,
    responses={
        400: {"description": "Nome ou preço ausente", "model": MessageResponse},
        **_SERVER_ERROR,
    },
    summary="Criar novo produto",
)
async def create_produto(
    payload: Optional[ProdutoIn] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ProdutoMutationResponse:
    # A request without a body is treated like an empty object → 400
    produto = await produto_service.create_produto(db, payload or ProdutoIn())
    logger.info("Produto %s criado", produto.id)
    return ProdutoMutationResponse(message="Produto criado com sucesso", produto=produto)


@router.put(
    "/{produto_id}",
    response_model=ProdutoMutationResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Atualizar produto",
    description="Sobrescreve nome, preço e categoria; campos ausentes viram NULL.",
)
async def update_produto(
    produto_id: str,
    payload: Optional[ProdutoIn] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ProdutoMutationResponse:
    produto = await produto_service.update_produto(db, produto_id, payload or ProdutoIn())
    logger.info("Produto %s atualizado", produto.id)
    return ProdutoMutationResponse(message="Produto atualizado com sucesso", produto=produto)


@router.delete(
    "/{produto_id}",
    response_model=MessageResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Deletar produto",
)
async def delete_produto(
    produto_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await produto_service.delete_produto(db, produto_id)
    logger.info("Produto %s deletado", produto_id)
    return MessageResponse(success=True, message="Produto deletado com sucesso")
