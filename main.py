from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup, validate_required_config
from core.errors import InvalidArgument, PreconditionViolation, programmer_error
from core.logging_config import logger

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.auth import router as auth_router
from routers.permissions import router as permissions_router
from routers.roles import router as roles_router
from routers.selections import router as selections_router
from routers.health import router as health_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="LeaseDesk back office: permission checks, role admin and cascading selections",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup logging
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
        if settings.ENV == "production":
            validate_config_on_startup()
        else:
            for name in validate_required_config():
                logger.warning(f"{name} is not set; Supabase-backed routes will fail")
        for route in app.routes:
            methods = ",".join(sorted(getattr(route, "methods", None) or []))
            logger.debug(f"Route {methods:10s} {getattr(route, 'path', '')}")

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url}: {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Core logic errors that escaped a router are still caller mistakes
    @app.exception_handler(InvalidArgument)
    @app.exception_handler(PreconditionViolation)
    async def handle_programmer_error(request: Request, exc: Exception):
        logger.error(f"{type(exc).__name__} at {request.url}: {exc}")
        http_exc = programmer_error(exc)
        return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(auth_router)
    app.include_router(permissions_router)
    app.include_router(roles_router)
    app.include_router(selections_router)
    app.include_router(health_router)

    return app


# Create the global FastAPI instance
app = create_app()
