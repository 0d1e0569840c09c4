import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rangecipher.api.v1.router import api_router
from rangecipher.core.config import get_settings
from rangecipher.core.exceptions import CipherError, EngineNotFoundError, ValidationError
from rangecipher.models.schemas import ErrorResponse

logger = logging.getLogger(__name__)

settings = get_settings()


def _error_response(exc: CipherError, status_code: int) -> JSONResponse:
    body = ErrorResponse(
        error=type(exc).__name__,
        message=exc.message,
        details=exc.details,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(exc, status.HTTP_400_BAD_REQUEST)


async def engine_not_found_handler(request: Request, exc: EngineNotFoundError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(exc, status.HTTP_404_NOT_FOUND)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Range-restricted substitution cipher API. "
            "Encrypt and decrypt text with the Caesar, Affine and Atbash "
            "ciphers over configurable code point ranges."
        ),
        version="0.1.0",
        debug=settings.debug,
        openapi_url=f"{settings.api_v1_prefix}/openapi.json",
        docs_url=f"{settings.api_v1_prefix}/docs",
        redoc_url=f"{settings.api_v1_prefix}/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(EngineNotFoundError, engine_not_found_handler)

    # Include API router
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    return app


app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "rangecipher.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
