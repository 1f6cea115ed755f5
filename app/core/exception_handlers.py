"""
Exception handlers globais para capturar e logar erros da API.

Todas as respostas de erro seguem o formato `{"error": mensagem}`.
"""
import json
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import ApiError
from app.utils.logger import logger


async def api_error_handler(request: Request, exc: ApiError):
    log_message = (
        f"[{type(exc).__name__} {exc.status_code}] {request.method} {request.url.path} - "
        f"{exc.message}"
    )
    if exc.status_code >= 500:
        logger.error(log_message)
    else:
        logger.warning(log_message)

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Corpo malformado (JSON inválido ou que não é objeto) vira 400.
    """
    error_details = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "type": error.get("type", "unknown"),
            "message": error.get("msg", "Erro de validação"),
        }
        for error in exc.errors()
    ]
    logger.warning(
        f"[VALIDATION ERROR 400] {request.method} {request.url.path} - "
        f"{json.dumps(error_details, ensure_ascii=False, default=str)}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Cuerpo de la solicitud inválido"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    status_code = exc.status_code
    log_message = f"[HTTP ERROR {status_code}] {request.method} {request.url.path} - Detalhes: {exc.detail}"
    if status_code >= 500:
        logger.error(log_message)
    else:
        logger.warning(log_message)

    return JSONResponse(status_code=status_code, content={"error": str(exc.detail)})


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handler para exceções não tratadas.
    """
    logger.error(
        f"[UNHANDLED EXCEPTION] {request.method} {request.url.path} - "
        f"{type(exc).__name__}: {exc}"
    )
    logger.error(f"[UNHANDLED EXCEPTION] Traceback completo:\n{traceback.format_exc()}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Error interno"},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
