"""
Produtos API — Produto SQLAlchemy Model
========================================

What:  ORM model representing the `produtos` table.
Who:   Used by ProdutoService for CRUD statements and by Alembic for schema management.

Table Design:
    - id: integer identity assigned by the database on INSERT
    - nome / preco: NOT NULL; create refuses to send them empty, update does not
      check, so a NULL there surfaces as a storage error (500)
    - categoria: nullable; "Geral" is filled in by the create path only
    - preco: NUMERIC(10, 2) read back as float so JSON carries a number
"""

from typing import Optional

from sqlalchemy import Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from produtos_api.database import Base


class Produto(Base):
    """A product row. Lifecycle: INSERT → SELECT/UPDATE in place → DELETE."""

    __tablename__ = "produtos"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    nome: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    preco: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
    )

    categoria: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Produto(id={self.id}, nome='{self.nome}', preco={self.preco})>"
