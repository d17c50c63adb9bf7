"""
FlapMyPort API - Main Application Entry Point
"""
import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from flapmyport.config import settings
from flapmyport.database import engine
from flapmyport.routers import flaps


def configure_logging() -> None:
    handler_kwargs = {"filename": settings.LOGFILE} if settings.LOGFILE else {}
    logging.basicConfig(
        level=logging.DEBUG if settings.VERBOSE else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        **handler_kwargs,
    )


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.debug("DBHost: %s", settings.DBHOST)
    logger.debug("DBName: %s", settings.DBNAME)
    logger.debug("DBUser: %s", settings.DBUSER)

    yield

    await engine.dispose()
    logger.info("FlapMyPort API shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)


# Request ID middleware for log correlation
@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    if response.status_code >= 400:
        logger.info("[%s] %s %s -> %d", request_id, request.method, request.url, response.status_code)
    return response


app.include_router(flaps.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": settings.APP_VERSION}
