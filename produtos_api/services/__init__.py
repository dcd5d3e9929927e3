# Services package init
"""
Produtos API — Services Layer
==============================

What:  Sits between routes (HTTP) and the database (persistence).
How:   Services receive an AsyncSession per call, issue SQL and raise the
       application exceptions from produtos_api.exceptions.

Service Inventory:
    - ProdutoService: CRUD over the `produtos` table
"""
