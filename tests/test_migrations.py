"""
Produtos API — Migration Tests
===============================

What:  Runs revision 001 against a throwaway SQLite database through
       Alembic's Operations API and checks the resulting table matches the
       ORM model.
"""

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from produtos_api.models.produto import Produto

VERSIONS = Path(__file__).resolve().parent.parent / "alembic" / "versions"


def _load_revision(filename: str):
    spec = importlib.util.spec_from_file_location(filename[:-3], VERSIONS / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def revision_001():
    return _load_revision("001_create_produtos_table.py")


def _run(engine, step):
    with engine.begin() as conn:
        ctx = MigrationContext.configure(conn)
        with Operations.context(ctx):
            step()


def test_upgrade_creates_produtos(revision_001):
    engine = create_engine("sqlite://")

    _run(engine, revision_001.upgrade)

    inspector = inspect(engine)
    assert inspector.get_table_names() == ["produtos"]
    columns = {c["name"]: c for c in inspector.get_columns("produtos")}
    assert set(columns) == {c.name for c in Produto.__table__.columns}
    assert columns["nome"]["nullable"] is False
    assert columns["preco"]["nullable"] is False
    assert columns["categoria"]["nullable"] is True
    assert inspector.get_pk_constraint("produtos")["constrained_columns"] == ["id"]


def test_downgrade_drops_produtos(revision_001):
    engine = create_engine("sqlite://")
    _run(engine, revision_001.upgrade)

    _run(engine, revision_001.downgrade)

    assert inspect(engine).get_table_names() == []


def test_revision_is_the_root(revision_001):
    assert revision_001.revision == "001"
    assert revision_001.down_revision is None
