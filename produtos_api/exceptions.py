"""
Produtos API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the three failure classes the API knows.
Why:   Services raise; global handlers registered in main.py turn each class
       into its JSON envelope and HTTP status, so routes stay free of try/except.

Exception Hierarchy:
    ProdutosApiError (base)
    ├── ValidationError  → 400 Bad Request   {success: false, message}
    ├── NotFoundError    → 404 Not Found     {success: false, message}
    └── DatabaseError    → 500 Server Error  {success: false, error}

Messages are Portuguese because they are returned to API clients verbatim.
"""

from typing import Any, Dict, Optional


class ProdutosApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Client-facing description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Erro inesperado",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ProdutosApiError):
    """
    Raised when client input fails validation.

    When:    POST /produtos without `nome` or `preco`.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Dados inválidos",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ProdutosApiError):
    """
    Raised when the targeted product does not exist.

    When:    GET/PUT/DELETE /produtos/{id} matched no row.
    HTTP:    404 Not Found

    An expected negative result; handlers do not log it as an error.
    """

    def __init__(
        self,
        resource_id: Optional[str] = None,
        message: str = "Produto não encontrado",
    ):
        ctx = {"resource_id": resource_id} if resource_id is not None else {}
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(ProdutosApiError):
    """
    Raised when a storage operation fails for any reason.

    What:    Connectivity loss, constraint violation, bad cast of an id, etc.
    HTTP:    500 Internal Server Error

    Security Note:
        The client always receives "Erro interno do servidor". The driver
        error is logged server-side and kept in `context`, never in the body.
    """

    def __init__(
        self,
        message: str = "Erro interno do servidor",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
