"""
Produtos API — Status Routes (banner and health check)
=======================================================

What:  GET / (static banner) and GET /health (database liveness).
Who:   Called by humans checking the service, Docker health checks and load balancers.

Health Check Philosophy:
    The API is reported "Online" whenever this handler runs at all; only the
    database status varies. Unlike every other endpoint, /health returns the
    raw driver error in its body so operators can see why the database is
    unreachable.

    Status levels:
    - healthy:   SELECT now() answered (HTTP 200)
    - unhealthy: the query failed (HTTP 500)
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from produtos_api.database import Database
from produtos_api.schemas.produto import HealthResponse, RootResponse, UnhealthyResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Status"])


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "/",
    response_model=RootResponse,
    summary="Banner da API",
)
async def root() -> RootResponse:
    """Confirms the process is answering. Never touches the database."""
    return RootResponse(
        message="🚀 API de produtos funcionando!",
        timestamp=utc_timestamp(),
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"description": "Banco indisponível", "model": UnhealthyResponse}},
    summary="Health check da API e do banco",
)
async def health_check(request: Request):
    database: Database = request.app.state.database
    try:
        db_time = await database.now()
    except Exception as e:
        logger.error("Health check failed: %s", str(e), exc_info=True)
        body = UnhealthyResponse(
            api="⚠️  Online",
            database="❌ Desconectado",
            error=str(e),
        )
        return JSONResponse(status_code=500, content=jsonable_encoder(body))

    return HealthResponse(
        api="✅ Online",
        database="✅ Conectado",
        timestamp=db_time,
    )
