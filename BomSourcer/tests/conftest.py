"""
Main Test Configuration

Stub suppliers stand in for the real APIs so service and route tests never
touch the network. Each stub records the queries it was asked.
"""

import pytest
from fastapi.testclient import TestClient
from typing import List, Optional

from BomSourcer.main import app
from BomSourcer.suppliers.base import BaseSupplier, Part, SearchQuery, SupplierInfo
from BomSourcer.services.parts_search_service import PartsSearchService, get_parts_search_service


class StubSupplier(BaseSupplier):
    """In-memory supplier returning a fixed list of parts"""

    def __init__(self, name: str, display_name: str, parts: Optional[List[Part]] = None,
                 configured: bool = True, error: Optional[Exception] = None):
        self._name = name
        self._display_name = display_name
        self._configured = configured
        self.parts = list(parts or [])
        self.error = error
        self.calls: List[SearchQuery] = []
        super().__init__()

    def get_supplier_info(self) -> SupplierInfo:
        return SupplierInfo(
            name=self._name,
            display_name=self._display_name,
            description=f"Stub {self._display_name}",
            configuration_note=f"{self._display_name} stub",
            setup_steps=[] if self._name == "jlcpcb" else [f"Configure {self._display_name}"],
        )

    def is_configured(self) -> bool:
        return self._configured

    async def search_parts(self, query: SearchQuery) -> List[Part]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return list(self.parts)


@pytest.fixture
def make_part():
    """Factory for Part records with sensible defaults"""

    def _make(supplier: str = "JLCPCB", **overrides) -> Part:
        fields = {
            "supplier": supplier,
            "part_number": "PN-1",
            "manufacturer": "Yageo",
            "manufacturer_part_number": "RC0402FR-07100KL",
            "description": "100kΩ ±1% Resistor",
            "stock": 1000,
            "price": 0.01,
        }
        fields.update(overrides)
        return Part(**fields)

    return _make


@pytest.fixture
def stub_suppliers():
    """One empty stub per supplier, keyed by identifier in priority order"""
    return {
        "jlcpcb": StubSupplier("jlcpcb", "JLCPCB"),
        "digikey": StubSupplier("digikey", "Digi-Key"),
        "mouser": StubSupplier("mouser", "Mouser"),
    }


@pytest.fixture
def search_service(stub_suppliers):
    return PartsSearchService(stub_suppliers)


@pytest.fixture
def test_client(search_service):
    """Test client whose routes use the stubbed search service"""
    app.dependency_overrides[get_parts_search_service] = lambda: search_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
