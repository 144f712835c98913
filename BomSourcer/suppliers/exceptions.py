"""
Supplier System Exceptions

Re-exports the supplier exceptions from the consolidated BomSourcer.exceptions
module so adapters can import them from the suppliers package.
"""

from BomSourcer.exceptions import (
    SupplierError,
    SupplierConfigurationError,
    SupplierAuthenticationError,
    SupplierConnectionError,
    SupplierNotFoundError,
)

__all__ = [
    'SupplierError',
    'SupplierConfigurationError',
    'SupplierAuthenticationError',
    'SupplierConnectionError',
    'SupplierNotFoundError',
]
