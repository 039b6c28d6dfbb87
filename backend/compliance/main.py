"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from .api.v1.router import router as api_v1_router
from .config import settings
from .database import engine, init_db

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    init_db()
    yield
    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router, prefix=settings.api_v1_prefix)


@app.get("/", tags=["root"])
async def root():
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


@app.get("/livez", tags=["health"])
async def livez():
    """Process is up."""
    return {"status": "ok"}


@app.get("/readyz", tags=["health"])
async def readyz():
    """Database is reachable and the schema has been created."""
    checks = {}
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1 FROM audit_templates LIMIT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        checks["database"] = f"error: {type(e).__name__}"
        return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": checks})

    return {"status": "ok", "checks": checks}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("compliance.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
