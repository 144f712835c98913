"""
Supplier Registry

Central registry for discovering and instantiating supplier implementations.
Provides a factory pattern for getting supplier instances.
"""

from typing import Dict, List, Type, Optional
from .base import BaseSupplier
from .exceptions import SupplierNotFoundError


class SupplierRegistry:
    """
    Registry for managing supplier implementations.

    Suppliers are registered when their module is imported. Lookups accept
    either the identifier ("digikey") or the display name ("Digi-Key").
    """

    _suppliers: Dict[str, Type[BaseSupplier]] = {}
    _aliases: Dict[str, str] = {}

    @classmethod
    def register(cls, name: str, supplier_class: Type[BaseSupplier]):
        """Register a supplier implementation"""
        if not issubclass(supplier_class, BaseSupplier):
            raise ValueError("Supplier class must inherit from BaseSupplier")

        name = name.lower()
        cls._suppliers[name] = supplier_class
        display_name = supplier_class().get_supplier_info().display_name
        cls._aliases[display_name.lower()] = name

    @classmethod
    def resolve_name(cls, name: str) -> Optional[str]:
        """Map an identifier or display name to a registered identifier"""
        key = (name or "").strip().lower()
        if key in cls._suppliers:
            return key
        return cls._aliases.get(key)

    @classmethod
    def get_supplier_class(cls, name: str) -> Type[BaseSupplier]:
        resolved = cls.resolve_name(name)
        if resolved is None:
            raise SupplierNotFoundError(f"Supplier '{name}' not found", supplier_name=name)
        return cls._suppliers[resolved]

    @classmethod
    def get_supplier(cls, name: str) -> BaseSupplier:
        """Get a fresh, unconfigured instance of the specified supplier"""
        return cls.get_supplier_class(name)()

    @classmethod
    def get_available_suppliers(cls) -> List[str]:
        """Get list of all registered supplier identifiers, in registration order"""
        return list(cls._suppliers.keys())


def register_supplier(name: str):
    """Decorator for automatically registering suppliers"""

    def decorator(supplier_class: Type[BaseSupplier]):
        SupplierRegistry.register(name, supplier_class)
        return supplier_class

    return decorator


