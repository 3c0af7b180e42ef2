"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (metadata, middleware, routers, handlers)
  - Own the DB pool lifecycle through the lifespan
  - Expose health check and metrics endpoints
  - Provide the `auditdb-api` console script (uvicorn)

Collaborators:
  - RequestContextMiddleware: Request ID and logging context
  - api.router: authors / books / events endpoints
  - infrastructure.db.pool: init_pool / close_pool / get_pool

Constraints:
  - Every business endpoint is authorized per request (user header)
  - /healthz and /metrics are not authorized and write no audit event

Notes:
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics
"""

import argparse
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Response

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger, set_log_level
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, get_pool, init_pool
from .exception_handlers import register_exception_handlers
from .router import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )

    try:
        logger.info(
            "AuditDB API starting up",
            extra={
                "app_env": settings.app_env,
                "user_header": settings.user_header,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        close_pool()
        logger.info("AuditDB API shutting down")


def create_app(*, with_lifespan: bool = True) -> FastAPI:
    """
    Factory de la app.

    with_lifespan=False sirve a los tests unitarios: no abre pool y los
    endpoints usan un catálogo inyectado via dependency_overrides.
    """
    app = FastAPI(
        title="AuditDB API",
        version="0.1.0",
        lifespan=lifespan if with_lifespan else None,
        openapi_tags=[
            {"name": "authors", "description": "Audited author CRUD"},
            {"name": "books", "description": "Audited book CRUD (per author)"},
            {"name": "events", "description": "Audit log queries"},
        ],
    )

    # R: Middleware order: RequestContext wraps everything
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/healthz", tags=["health"])
    def healthz():
        """Liveness + DB check (SELECT 1). No authorization, no audit event."""
        try:
            with get_pool().connection() as conn:
                conn.execute("SELECT 1")
                conn.rollback()
            db_status = "connected"
        except Exception as exc:
            logger.warning("Health check failed", extra={"error": str(exc)})
            db_status = "disconnected"

        return {"ok": db_status == "connected", "db": db_status}

    @app.get("/metrics", tags=["health"])
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


def _parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="auditdb-api", description="Audited authors/books HTTP API"
    )
    parser.add_argument("--host", default=settings.host, help="bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="bind port")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="logger level",
    )
    return parser.parse_args(argv)


def run(argv=None) -> None:
    """Console script: auditdb-api [--host H] [--port P] [--log-level L]."""
    args = _parse_args(argv)
    set_log_level(args.log_level)
    logger.info(
        "Starting server",
        extra={"host": args.host, "port": args.port, "log_level": args.log_level},
    )
    uvicorn.run(
        create_app(),
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    run()
