"""
Produtos API — Produto Service
===============================

What:  Translates product operations into parameterized SQL statements.
Who:   Called by the route handlers in routes/produtos.py.
When:  Once per request; holds no state between calls.

Error Handling Strategy:
    Every storage round-trip runs inside `storage_errors()`. Whatever the
    driver raises there (connection refused, NOT NULL violation, an id that
    cannot be cast to integer) is logged with its traceback and re-raised as
    DatabaseError, which the global handler renders as the generic 500
    envelope. NotFoundError and ValidationError are raised outside the
    helper and pass through untouched.

Identifier handling:
    Path ids arrive as opaque strings. The service does not parse them; the
    statement casts the bound text to INTEGER on the server, so a malformed
    id is rejected (or simply not matched) by the database itself.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List

from sqlalchemy import Integer, Text, cast, delete, insert, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from produtos_api.exceptions import (
    DatabaseError,
    NotFoundError,
    ProdutosApiError,
    ValidationError,
)
from produtos_api.models.produto import Produto
from produtos_api.schemas.produto import ProdutoIn, ProdutoOut

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIA = "Geral"


@asynccontextmanager
async def storage_errors(action: str, **context: Any) -> AsyncIterator[None]:
    """
    Convert any storage failure inside the block into DatabaseError.

    Args:
        action:  Short description for the log line ("listing produtos")
        context: Extra fields kept on the exception for server-side logging
    """
    try:
        yield
    except ProdutosApiError:
        raise
    except Exception as e:
        logger.error("Database error while %s: %s", action, str(e), exc_info=True)
        raise DatabaseError(
            context={"action": action, "error_type": type(e).__name__, **context},
        ) from e


def _id_param(produto_id: str):
    # CAST(CAST(:id AS TEXT) AS INTEGER): the driver always binds text and
    # the database does the conversion
    return cast(cast(literal(str(produto_id), Text), Text), Integer)


class ProdutoService:
    """
    CRUD operations over the `produtos` table.

    Responsibilities:
        - list_produtos():  SELECT ... ORDER BY id
        - get_produto():    SELECT ... WHERE id = :id
        - create_produto(): presence check, then INSERT ... RETURNING
        - update_produto(): UPDATE ... RETURNING (all three fields overwritten)
        - delete_produto(): DELETE ... RETURNING
    """

    async def list_produtos(self, db: AsyncSession) -> List[ProdutoOut]:
        """Every product, ordered by id ascending. An empty table is not an error."""
        async with storage_errors("listing produtos"):
            result = await db.execute(select(Produto).order_by(Produto.id))
            rows = result.scalars().all()
        return [ProdutoOut.model_validate(row) for row in rows]

    async def get_produto(self, db: AsyncSession, produto_id: str) -> ProdutoOut:
        """
        Fetch one product.

        Raises:
            NotFoundError: no row has this id (→ 404)
            DatabaseError: the query failed (→ 500)
        """
        async with storage_errors("fetching produto", produto_id=produto_id):
            result = await db.execute(
                select(Produto).where(Produto.id == _id_param(produto_id))
            )
            row = result.scalar_one_or_none()

        if row is None:
            raise NotFoundError(resource_id=produto_id)
        return ProdutoOut.model_validate(row)

    async def create_produto(self, db: AsyncSession, payload: ProdutoIn) -> ProdutoOut:
        """
        Insert a product and return the stored row, including its new id.

        Validation happens before any statement is issued: `nome` and `preco`
        must both be present and truthy. `categoria` falls back to "Geral".

        Raises:
            ValidationError: nome or preco missing (→ 400)
            DatabaseError:   the insert failed (→ 500)
        """
        if not payload.nome or not payload.preco:
            raise ValidationError(message="Nome e preço são obrigatórios")

        async with storage_errors("creating produto"):
            result = await db.execute(
                insert(Produto)
                .values(
                    nome=payload.nome,
                    preco=payload.preco,
                    categoria=payload.categoria or DEFAULT_CATEGORIA,
                )
                .returning(Produto)
            )
            row = result.scalar_one()
            await db.commit()

        logger.info("Produto %s created", row.id)
        return ProdutoOut.model_validate(row)

    async def update_produto(
        self, db: AsyncSession, produto_id: str, payload: ProdutoIn
    ) -> ProdutoOut:
        """
        Overwrite nome, preco and categoria of one product.

        Absent fields are written as NULL; there is no merge with the stored
        values and no categoria default.

        Raises:
            NotFoundError: no row has this id (→ 404)
            DatabaseError: the update failed (→ 500)
        """
        async with storage_errors("updating produto", produto_id=produto_id):
            result = await db.execute(
                update(Produto)
                .where(Produto.id == _id_param(produto_id))
                .values(
                    nome=payload.nome,
                    preco=payload.preco,
                    categoria=payload.categoria,
                )
                .returning(Produto)
                .execution_options(synchronize_session=False)
            )
            row = result.scalar_one_or_none()
            await db.commit()

        if row is None:
            raise NotFoundError(resource_id=produto_id)
        logger.info("Produto %s updated", row.id)
        return ProdutoOut.model_validate(row)

    async def delete_produto(self, db: AsyncSession, produto_id: str) -> ProdutoOut:
        """
        Delete one product and return the removed row.

        Raises:
            NotFoundError: no row has this id (→ 404)
            DatabaseError: the delete failed (→ 500)
        """
        async with storage_errors("deleting produto", produto_id=produto_id):
            result = await db.execute(
                delete(Produto)
                .where(Produto.id == _id_param(produto_id))
                .returning(Produto)
                .execution_options(synchronize_session=False)
            )
            row = result.scalar_one_or_none()
            await db.commit()

        if row is None:
            raise NotFoundError(resource_id=produto_id)
        logger.info("Produto %s deleted", row.id)
        return ProdutoOut.model_validate(row)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the session is passed into every call
produto_service = ProdutoService()
