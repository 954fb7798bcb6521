import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.middleware.error_handlers import (
    ExceptionHandlerMiddleware,
    PerformanceMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers,
)
from app.routers import ai
from app.services.generation import get_gateway
from app.utils.logging_config import configure_for_environment, get_logger

configure_for_environment()
logger = get_logger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    gateway = get_gateway()
    if gateway.settings.has_credentials:
        logger.info(f"Job Tracker AI API starting with model {gateway.settings.model_name}")
    else:
        logger.warning("HF_API_KEY is not set - all generation will use the deterministic fallback")

    yield

    logger.info("Job Tracker AI API shutting down")


app = FastAPI(title="Job Tracker AI API", version=API_VERSION, lifespan=lifespan)

register_exception_handlers(app)

# add_middleware wraps: the last one added runs first
app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionHandlerMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ai.router, prefix="/api")


@app.get("/")
@app.head("/")
async def root():
    return {"message": "Job Tracker AI API", "version": API_VERSION, "status": "ok"}


@app.get("/health")
@app.head("/health")
@app.get("/api/health")
async def health_check():
    """Liveness check; GET and HEAD both answer"""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
