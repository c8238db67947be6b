"""Main module for the TableGen API service."""

import logging
import os
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from tablegen.api.v1.api import api_router
from tablegen.core.auth import decode_token
from tablegen.core.config import Settings, get_settings
from tablegen.services.llm.factory import CompletionServiceFactory
from tablegen.services.storage.factory import TableStoreFactory
from tablegen.services.table_generation_service import TableGenerationService
from tablegen.services.table_service import TableService

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.project_name,
    openapi_url=f"{settings.api_v1_str}/openapi.json",
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
    expose_headers=["Content-Disposition", "Content-Length"],
    max_age=600,
)


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware to check authentication for protected routes."""

    async def dispatch(self, request: Request, call_next):
        """Check authentication for protected routes.

        Args:
            request: The FastAPI request object.
            call_next: The next middleware or endpoint handler.

        Returns:
            Response: The response from the next middleware or endpoint.
        """
        public_paths = [
            "/ping",
            "/docs",
            "/redoc",
            f"{settings.api_v1_str}/auth/sign-in",
            f"{settings.api_v1_str}/auth/sign-up",
            f"{settings.api_v1_str}/tables/generate",
            f"{settings.api_v1_str}/tables/export",
            f"{settings.api_v1_str}/openapi.json",
        ]

        if any(request.url.path.startswith(path) for path in public_paths):
            return await call_next(request)

        # CORS preflight
        if request.method == "OPTIONS":
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return Response(
                content='{"detail":"Not authenticated"}',
                status_code=403,
                media_type="application/json"
            )

        token = auth_header.replace("Bearer ", "", 1)
        if decode_token(token) is None:
            return Response(
                content='{"detail":"Invalid or expired token"}',
                status_code=403,
                media_type="application/json"
            )

        return await call_next(request)


app.add_middleware(AuthMiddleware)

app.include_router(api_router, prefix=settings.api_v1_str)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.on_event("startup")
async def startup_event():
    """Initialize services once at application startup."""
    logger.info("Initializing application services...")

    if settings.langsmith_tracing and settings.langsmith_api_key:
        logger.info("Initializing LangSmith tracing")
        os.environ["LANGCHAIN_TRACING_V2"] = "true"
        os.environ["LANGCHAIN_ENDPOINT"] = settings.langsmith_endpoint
        os.environ["LANGCHAIN_API_KEY"] = settings.langsmith_api_key
        os.environ["LANGCHAIN_PROJECT"] = settings.langsmith_project
        logger.info(f"LangSmith tracing enabled with project: {settings.langsmith_project}")

    try:
        logger.info(f"Creating LLM service for provider: {settings.llm_provider}")
        llm_service = CompletionServiceFactory.create_service(settings)
        if llm_service is None:
            logger.error(f"Failed to create LLM service for provider: {settings.llm_provider}")
            app.state.services_initialized = False
            return
        app.state.table_generation_service = TableGenerationService(llm_service)

        logger.info(f"Creating table store for provider: {settings.table_store_provider}")
        store = TableStoreFactory.create_store(settings)
        if store is None:
            logger.error(f"Failed to create table store for provider: {settings.table_store_provider}")
            app.state.services_initialized = False
            return
        app.state.table_service = TableService(store, settings.max_saved_tables)

        app.state.services_initialized = True
        logger.info("All application services initialized successfully")
    except Exception as e:
        logger.error(f"Error initializing services: {str(e)}")
        app.state.services_initialized = False


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/ping")
async def pong(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Ping the API to check if it's running."""
    return {
        "ping": "pong!",
        "environment": settings.environment,
        "testing": settings.testing,
        "services_initialized": getattr(app.state, "services_initialized", False),
    }
