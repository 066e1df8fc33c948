"""
Store WhatsApp Webhook - Application Entry Point

Mounts the per-store WhatsApp webhook router and the health probes.
Backends (credential store, conversation managers) come from infra/.

Run: uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from config import Config
from infra import bootstrap_infrastructure
from stores import CredentialStore, CredentialStoreError
from transport.whatsapp.webhook import get_credential_store, router as whatsapp_router

APP_NAME = "Store WhatsApp Webhook"
APP_VERSION = "1.0.0"

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the infrastructure once before serving webhooks."""
    infra = bootstrap_infrastructure()
    logger.info(
        f"{APP_NAME} {APP_VERSION} starting "
        f"(env={Config.ENVIRONMENT}, graph={Config.WHATSAPP_GRAPH_URL}/{Config.WHATSAPP_API_VERSION})"
    )
    logger.info(f"Infrastructure: {infra!r}")

    yield

    logger.info(f"{APP_NAME} stopped")


app = FastAPI(
    title=APP_NAME,
    description="WhatsApp Business webhook receiver and outbound messaging for stores",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and latency; unhandled errors become 500."""
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {e}",
            exc_info=True,
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.debug(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
    )
    return response


app.include_router(whatsapp_router)


@app.get("/health/live")
async def health_live():
    """Liveness probe."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready(credential_store: CredentialStore = Depends(get_credential_store)):
    """
    Readiness probe.

    Ready when the Graph API settings are present and the credential
    store answers a lookup.
    """
    if not Config.validate():
        return {"status": "not_ready", "reason": "missing configuration"}

    try:
        await run_in_threadpool(credential_store.get, "__readiness_probe__")
    except CredentialStoreError as e:
        return {"status": "not_ready", "reason": str(e)}

    return {"status": "ready"}


@app.get("/")
async def root():
    """Service description."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "endpoints": {
            "whatsapp_verify": "GET /api/webhooks/whatsapp/message/{store_id}",
            "whatsapp_webhook": "POST /api/webhooks/whatsapp/message/{store_id}",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=Config.APP_PORT)
