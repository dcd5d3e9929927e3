# Routes package init
"""
Produtos API — Routes Package
==============================

Route Inventory:
    - health.py:    GET /                  (banner)
                    GET /health            (API + database status)
    - produtos.py:  GET/POST /produtos
                    GET/PUT/DELETE /produtos/{id}

Design Principle:
    Routes are THIN: they extract request data, call ProdutoService and
    build the success envelope. Error envelopes come from the exception
    handlers registered in main.py.
"""
