"""
Base router infrastructure for centralized error handling and response construction.

Routes return plain success payloads; failures are converted here into the
shared {success: false, error} shape so every endpoint fails the same way.
"""

import logging
from typing import Any, Callable, Optional
from functools import wraps

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from BomSourcer.exceptions import BomSourcerException
from BomSourcer.schemas.response import ErrorResponse

logger = logging.getLogger(__name__)


class BaseRouter:
    """Shared helpers for building responses and mapping exceptions"""

    @staticmethod
    def build_error_response(message: str, status_code: int = 500, **extra: Any) -> JSONResponse:
        """
        Build a standardized error response.

        Args:
            message: Error message shown to the caller
            status_code: HTTP status
            extra: Additional top-level fields (e.g. supplier configuration)
        """
        content = ErrorResponse(error=message).model_dump(exclude_none=True)
        content.update(extra)
        return JSONResponse(status_code=status_code, content=content)

    @staticmethod
    def handle_exception(e: Exception) -> Exception:
        """
        Convert exceptions into something the registered handlers can render.

        Application exceptions and HTTPExceptions pass through untouched;
        anything else becomes a 500 carrying the exception message.
        """
        if isinstance(e, (HTTPException, BomSourcerException)):
            return e
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return HTTPException(status_code=500, detail=str(e) or "Internal server error")


def standard_error_handling(func: Callable) -> Callable:
    """
    Decorator that provides standardized error handling for route functions.

    Usage:
        @standard_error_handling
        async def my_route():
            ...
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            raise BaseRouter.handle_exception(e)
    return wrapper
