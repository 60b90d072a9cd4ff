import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings
from .core.database import build_engine, create_db_and_tables
from .core.exceptions import AppError
from .schemas.common import error_body
from .api.auth import router as auth_router
from .api.invitations import router as invitation_router
from .api.vendors import router as vendor_router

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append(f"{'.'.join(location) or 'body'}: {error.get('msg')}")
    return "Invalid request: " + "; ".join(fields)


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=error_body(400, _validation_message(exc)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body(500, "Server error"))


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    # Same cached settings the token service and register read
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_db_and_tables(app.state.engine)
        yield
        app.state.engine.dispose()

    app = FastAPI(
        title="TripTech API",
        description="API for the TripTech fleet and trip logistics platform",
        version="0.1.0",
        lifespan=lifespan,
    )
    # One engine per process, shared by every request through get_session
    app.state.engine = engine if engine is not None else build_engine(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/api/health", tags=['Health Check'])
    async def health_check():
        return {"success": True, "message": "TripTech API is running"}

    app.include_router(auth_router, prefix='/api/auth', tags=['Authentication'])
    app.include_router(invitation_router, prefix='/api/invites', tags=['Invitations'])
    app.include_router(vendor_router, prefix='/api/vendors', tags=['Vendors'])

    return app


def run():
    import uvicorn
    settings = get_settings()
    uvicorn.run("triptech.main:create_app", factory=True, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
