from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from crm.api.routes import auth, companies, contacts, health, leads, tasks
from crm.core.config import settings
from crm.core.errors import CRMError
from crm.core.logging_setup import logger
from crm.db.session import build_engine, init_db


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    engine = build_engine(settings.database_url, echo=settings.debug)
    init_db(engine)
    application.state.engine = engine

    if settings.uses_fallback_secret:
        logger.warning("JWT_SECRET is not set, signing tokens with the insecure fallback key")

    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database pool disposed")


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.project_name,
        debug=settings.debug,
        lifespan=lifespan,
    )

    logger.info("%s initialised (environment=%s)", settings.project_name, settings.environment)

    # ===============================================================
    # CORS
    # ===============================================================
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ===============================================================
    # ERRORS
    # ===============================================================
    @application.exception_handler(CRMError)
    async def handle_crm_error(_: Request, exc: CRMError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @application.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @application.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"},
            )

    # ===============================================================
    # ROUTES
    # ===============================================================
    application.include_router(health.router, prefix="/health")
    application.include_router(auth.router)
    application.include_router(companies.router)
    application.include_router(contacts.router)
    application.include_router(leads.router)
    application.include_router(tasks.router)

    return application


app = create_app()
