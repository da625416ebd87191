"""
FastAPI application for SecureQuote.

Mounts the quotation RPC routes and the healthcheck under the configured
prefix and maps service errors to HTTP responses.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from securequote import __version__
from securequote.errors import QuotationStoreError, QuotationValidationError
from securequote.routes import rpc, system
from securequote.utils.config import settings
from securequote.utils.database import db
from securequote.utils.logging_config import setup_logging
from securequote.utils.schema import init_schema

logger = logging.getLogger(__name__)


def create_app(init_db: Optional[bool] = None) -> FastAPI:
    """
    Build the FastAPI application.
    
    Args:
        init_db: Create the schema on startup (default: settings.INIT_SCHEMA)
    """
    run_init = settings.INIT_SCHEMA if init_db is None else init_db
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if run_init:
            logger.info("Initializing database schema...")
            init_schema()
        yield
        db.close()
    
    app = FastAPI(title="SecureQuote API", version=__version__, lifespan=lifespan)
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    
    app.include_router(system.router, prefix=settings.API_PREFIX)
    app.include_router(rpc.router, prefix=settings.API_PREFIX)
    
    @app.exception_handler(QuotationValidationError)
    async def handle_validation_error(request: Request, exc: QuotationValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": [{
                "loc": exc.field.split("."),
                "msg": exc.message,
                "type": "value_error",
            }]},
        )
    
    @app.exception_handler(QuotationStoreError)
    async def handle_store_error(request: Request, exc: QuotationStoreError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__ or exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    
    return app


setup_logging()
app = create_app()
