"""
Parts Search Service

Fans a single SearchQuery out to the enabled suppliers concurrently and
collects the non-empty result lists keyed by supplier display name.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Iterable, Any

from BomSourcer.suppliers import SupplierRegistry, SearchQuery, Part, BaseSupplier
from BomSourcer.utils.env_credentials import get_supplier_credentials_from_env, get_supplier_config_from_env

logger = logging.getLogger(__name__)

# Fixed priority order; also the order of keys in search results
DEFAULT_SUPPLIERS = ("jlcpcb", "digikey", "mouser")


class PartsSearchService:
    """Owns one adapter per supplier and dispatches queries to them"""

    def __init__(self, suppliers: Optional[Dict[str, BaseSupplier]] = None):
        if suppliers is None:
            suppliers = {name: SupplierRegistry.get_supplier(name) for name in DEFAULT_SUPPLIERS}
        self.suppliers: Dict[str, BaseSupplier] = {name.lower(): supplier for name, supplier in suppliers.items()}

    @classmethod
    def from_environment(cls) -> "PartsSearchService":
        """Build adapters configured from environment credentials"""
        suppliers = {}
        for name in DEFAULT_SUPPLIERS:
            supplier = SupplierRegistry.get_supplier(name)
            supplier.configure(
                credentials=get_supplier_credentials_from_env(name) or {},
                config=get_supplier_config_from_env(name),
            )
            suppliers[name] = supplier
        return cls(suppliers)

    def _resolve_enabled(self, enabled: Optional[Iterable[str]]) -> List[str]:
        """Normalize caller-supplied identifiers, keeping priority order"""
        if enabled is None:
            return [name for name in DEFAULT_SUPPLIERS if name in self.suppliers] or list(self.suppliers)

        requested = set()
        for name in enabled:
            resolved = SupplierRegistry.resolve_name(name)
            if resolved is None or resolved not in self.suppliers:
                logger.warning(f"Ignoring unknown supplier '{name}'")
                continue
            requested.add(resolved)

        return [name for name in self.suppliers if name in requested]

    async def search(self, query: SearchQuery, enabled: Optional[Iterable[str]] = None) -> Dict[str, List[Part]]:
        """Search enabled suppliers in parallel.

        Suppliers that return nothing are omitted from the result rather than
        mapped to an empty list.
        """
        if not query.has_search_text():
            return {}

        names = self._resolve_enabled(enabled)
        if not names:
            return {}

        outcomes = await asyncio.gather(*(self.suppliers[name].search(query) for name in names))

        results: Dict[str, List[Part]] = {}
        for name, parts in zip(names, outcomes):
            if parts:
                results[self.suppliers[name].display_name] = parts

        counts = ", ".join(f"{supplier}={len(parts)}" for supplier, parts in results.items()) or "none"
        logger.debug(f"Search '{query.value or query.manufacturer_part_number}' results: {counts}")
        return results

    def get_configuration_status(self) -> Dict[str, bool]:
        return {name: supplier.is_configured() for name, supplier in self.suppliers.items()}

    def get_supplier_configuration(self) -> Dict[str, Any]:
        """Per-supplier status plus setup instructions for credentialed suppliers"""
        suppliers = {}
        instructions = {}
        for name, supplier in self.suppliers.items():
            info = supplier.get_supplier_info()
            suppliers[name] = {
                "name": info.display_name,
                "configured": supplier.is_configured(),
                "note": info.configuration_note,
            }
            if info.setup_steps:
                instructions[name] = {"steps": list(info.setup_steps)}
        return {"suppliers": suppliers, "instructions": instructions}

    async def close(self):
        for supplier in self.suppliers.values():
            await supplier.close()


_parts_search_service: Optional[PartsSearchService] = None


def get_parts_search_service() -> PartsSearchService:
    """Process-wide service configured from the environment (FastAPI dependency)"""
    global _parts_search_service
    if _parts_search_service is None:
        _parts_search_service = PartsSearchService.from_environment()
    return _parts_search_service


async def shutdown_parts_search_service():
    global _parts_search_service
    if _parts_search_service is not None:
        await _parts_search_service.close()
        _parts_search_service = None
