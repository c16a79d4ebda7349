import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pastebox.core.errors import PasteboxError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Глобальные обработчики ошибок"""
    _register_pastebox_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_pastebox_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PasteboxError)
    async def pastebox_error_handler(request: Request, exc: PasteboxError):
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            "PasteboxError: %s",
            exc.message,
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=exc.headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "validation_error",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Никаких внутренних деталей в ответе"""
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal_error"},
        )
