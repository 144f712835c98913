"""
Modular Supplier System

Each supplier translates a SearchQuery into its own API request and maps the
response back into the common Part record.

Architecture:
- BaseSupplier: Abstract base class defining the supplier interface
- Individual supplier classes: JLCPCBSupplier, DigiKeySupplier, MouserSupplier
- SupplierRegistry: Factory for discovering and instantiating suppliers

Usage:
    from BomSourcer.suppliers import SupplierRegistry, SearchQuery

    supplier = SupplierRegistry.get_supplier("mouser")
    supplier.configure({"api_key": "..."})
    parts = await supplier.search(SearchQuery(value="100nF", footprint="0402"))
"""

from .base import BaseSupplier, Part, SearchQuery, SupplierInfo
from .registry import SupplierRegistry
from .exceptions import SupplierError, SupplierConfigurationError, SupplierAuthenticationError

# Import supplier implementations to register them (order is selection priority)
from . import jlcpcb
from . import digikey
from . import mouser

__all__ = [
    "BaseSupplier",
    "Part",
    "SearchQuery",
    "SupplierInfo",
    "SupplierRegistry",
    "SupplierError",
    "SupplierConfigurationError",
    "SupplierAuthenticationError",
]
