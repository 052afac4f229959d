# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers import (
    user_router,
    auth_router,
    activity_router,
    warehouse_router,
    zone_router,
    location_router,
    door_router,
    customer_router,
    supplier_router,
    contact_router,
    item_router,
    uom_router,
)

from app.core.config import APP_ENV, APP_VERSION, CORS_ORIGINS, IS_PRODUCTION
from app.core.db import init_models, dispose_engine
from app.core.error_handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.middleware.request_logging import request_logging_middleware
from app.schemas.auth.auth_context import AuthContext
from app.utils.get_user import get_optional_user

APP_NAME = "Vault WMS API"
API_PREFIX = "/api"

ROUTERS = (
    auth_router,
    user_router,
    activity_router,
    warehouse_router,
    zone_router,
    location_router,
    door_router,
    customer_router,
    supplier_router,
    contact_router,
    item_router,
    uom_router,
)

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s", APP_NAME, extra={"environment": APP_ENV})

    # outside development the schema is managed by migrations
    if APP_ENV == "development":
        await init_models()
        logger.info("Tables created (development)")

    yield

    await dispose_engine()
    logger.info("Shutting down %s", APP_NAME)


app = FastAPI(
    title=APP_NAME,
    description="Multi-tenant warehouse management backend",
    version=APP_VERSION,
    docs_url=None if IS_PRODUCTION else "/docs",
    redoc_url=None,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.middleware("http")(request_logging_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.get("/", tags=["Health"])
async def health_check(user: Optional[AuthContext] = Depends(get_optional_user)):
    return {
        "status": "ok",
        "service": "vault-wms-api",
        "environment": APP_ENV,
        "version": APP_VERSION,
        "authenticated": user is not None,
    }


for router in ROUTERS:
    app.include_router(router, prefix=API_PREFIX)
