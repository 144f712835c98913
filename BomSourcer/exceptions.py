"""
BomSourcer error types.

Supplier errors are raised inside adapters and absorbed by BaseSupplier.search,
so they only reach a client if an adapter is called directly. BOM errors are
raised while reading an upload and become 4xx responses through the handlers
in BomSourcer.handlers.
"""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class BomSourcerException(Exception):
    """Root of every error this package raises on purpose"""

    error_code = "BOM_SOURCER_ERROR"
    http_status = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        if error_code:
            self.error_code = error_code

    def _add_detail(self, key: str, value: Any):
        if value:
            self.details[key] = value


# Supplier adapters

class SupplierError(BomSourcerException):
    """A supplier could not answer a search"""

    error_code = "SUPPLIER_ERROR"
    http_status = 502

    def __init__(self, message: str, supplier_name: Optional[str] = None, error_code: Optional[str] = None):
        super().__init__(message, error_code=error_code)
        self.supplier_name = supplier_name
        self._add_detail("supplier_name", supplier_name)


class SupplierConfigurationError(SupplierError):
    """Credentials or settings for a supplier are missing or unusable"""

    error_code = "SUPPLIER_CONFIGURATION_ERROR"
    http_status = 500

    def __init__(self, message: str, supplier_name: Optional[str] = None, config_field: Optional[str] = None):
        super().__init__(message, supplier_name=supplier_name)
        self.config_field = config_field
        self._add_detail("config_field", config_field)


class SupplierAuthenticationError(SupplierError):
    """The supplier refused the token request or returned no token"""

    error_code = "SUPPLIER_AUTHENTICATION_ERROR"
    http_status = 401


class SupplierConnectionError(SupplierError):
    """Transport failure or non-2xx answer from a supplier API"""

    error_code = "SUPPLIER_CONNECTION_ERROR"
    http_status = 503

    def __init__(self, message: str, supplier_name: Optional[str] = None, endpoint: Optional[str] = None):
        super().__init__(message, supplier_name=supplier_name)
        self.endpoint = endpoint
        self._add_detail("endpoint", endpoint)


class SupplierNotFoundError(SupplierError):
    """No adapter is registered under the requested identifier"""

    error_code = "SUPPLIER_NOT_FOUND"
    http_status = 404


# BOM uploads

class BomParseError(BomSourcerException):
    """Uploaded BOM is empty, undecodable or lacks required columns"""

    error_code = "BOM_PARSE_ERROR"
    http_status = 400

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None, filename: Optional[str] = None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])
        self.filename = filename
        self._add_detail("missing_fields", self.missing_fields)
        self._add_detail("filename", filename)


def log_exception(exception: Exception, context: Optional[str] = None):
    """Log an error with its code and details attached as record extras"""
    if isinstance(exception, BomSourcerException):
        extra = {"error_code": exception.error_code, "details": exception.details, "context": context}
        logger.error(f"{exception.error_code} ({context}): {exception.message}", extra=extra)
    else:
        extra = {"exception_type": type(exception).__name__, "context": context}
        logger.error(f"Unexpected {type(exception).__name__} ({context}): {exception}", extra=extra)


def get_http_status_code(exception: Exception) -> int:
    if isinstance(exception, BomSourcerException):
        return exception.http_status
    return 500
