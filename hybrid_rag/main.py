"""FastAPI app entry: config, logging, service wiring, health, and graceful shutdown."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hybrid_rag.config.logging import configure_logging, get_logger
from hybrid_rag.config.settings import get_settings
from hybrid_rag.controllers.routes.chunk import router as chunk_router
from hybrid_rag.controllers.routes.index import router as index_router
from hybrid_rag.controllers.routes.search import router as search_router
from hybrid_rag.repositories.mongodb.base import RepositoryError
from hybrid_rag.resources.mongo.client import close_mongo_client
from hybrid_rag.resources.mongo.session import ping_mongo
from hybrid_rag.resources.opensearch.client import close_opensearch_client
from hybrid_rag.resources.opensearch.health import ping_opensearch
from hybrid_rag.services.container import build_services
from hybrid_rag.services.search.base import VectorStoreError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and services. Shutdown: close MongoDB and OpenSearch clients."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    # Clients connect lazily; building services does no I/O
    app.state.services = build_services(settings)
    yield
    logger.info("Application shutting down")
    close_mongo_client()
    await close_opensearch_client()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Hybrid RAG Service",
    description="Chunk, index and retrieve documents with hybrid vector + keyword search",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(chunk_router)
app.include_router(index_router)
app.include_router(search_router)


def _health_response(ok: bool, mongo: dict[str, Any], opensearch: dict[str, Any]) -> dict[str, Any]:
    return {
        "status": "ok" if ok else "degraded",
        "mongo": {"ok": mongo.get("ok", False), "error": mongo.get("error")},
        "opensearch": {"ok": opensearch.get("ok", False), "error": opensearch.get("error")},
    }


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up. Does not check dependencies."""
    return {"status": "ok"}


@app.get("/ready")
async def ready() -> JSONResponse:
    """Readiness: verifies MongoDB and OpenSearch connectivity."""
    mongo = await ping_mongo()
    opensearch = await ping_opensearch()
    ok = mongo.get("ok", False) and opensearch.get("ok", False)
    return JSONResponse(content=_health_response(ok, mongo, opensearch), status_code=200 if ok else 503)


@app.exception_handler(RepositoryError)
@app.exception_handler(VectorStoreError)
async def dependency_error_handler(_request: Request, exc: Exception):
    logger.warning("Storage dependency failed", extra={"error": type(exc).__name__})
    return JSONResponse(
        content={"detail": "A dependency is temporarily unavailable. Please retry later."},
        status_code=503,
    )


@app.exception_handler(ValueError)
async def value_error_handler(_request: Request, exc: ValueError):
    return JSONResponse(content={"detail": str(exc)}, status_code=400)


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: connection failures and timeouts get clear, non-leaking messages."""
    exc_name = type(exc).__name__
    # Do not leak stack traces or internal details to the client
    if "Connection" in exc_name or "Timeout" in exc_name:
        logger.warning("Connection or timeout error", extra={"error": exc_name})
        return JSONResponse(
            content={"detail": "A dependency is temporarily unavailable. Please retry later."},
            status_code=503,
        )
    logger.exception("Unhandled error")
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )


if __name__ == "__main__":
    import uvicorn

    s = get_settings()
    uvicorn.run("hybrid_rag.main:app", host=s.host, port=s.port)
