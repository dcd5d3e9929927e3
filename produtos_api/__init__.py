"""
Produtos API — Application Package Initializer
===============================================

What: Marks the `produtos_api` directory as a Python package.
Why:  Enables module imports like `from produtos_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Product rules)    │  ← Validation, error conversion
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Injected engine + sessions
    └─────────────────────────────────────┘

    The database handle is built once and handed to the app factory, so a
    test can swap PostgreSQL for an in-memory SQLite database.
"""

__version__ = "1.0.0"
