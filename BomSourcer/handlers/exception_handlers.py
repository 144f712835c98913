from fastapi import Request
from fastapi.exceptions import RequestValidationError, HTTPException
from starlette.responses import JSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY

from BomSourcer.exceptions import BomSourcerException, get_http_status_code, log_exception
from BomSourcer.schemas.response import ErrorResponse


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app):
    """Render every failure as {"success": false, "error": ..., "details"?: ...}"""

    @app.exception_handler(BomSourcerException)
    async def bom_sourcer_exception_handler(request: Request, exc: BomSourcerException):
        log_exception(exc, context=f"{request.method} {request.url.path}")
        return _error(get_http_status_code(exc), exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = [
            f"{'.'.join(str(part) for part in problem.get('loc', ()))}: {problem.get('msg')}"
            for problem in exc.errors()
        ]
        return _error(HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", problems)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return _error(exc.status_code, message)
