# Middleware package init
"""
Produtos API — Middleware Package
==================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first so the access log line can carry it
    2. Logging measures everything below it, including CORS and the handler
    3. CORS answers preflight OPTIONS requests
"""
