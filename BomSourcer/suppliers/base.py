"""
Base Supplier Interface

Defines the abstract interface that all supplier implementations must follow,
plus the two records every supplier speaks: SearchQuery (what the caller wants)
and Part (the normalized result every adapter must produce).
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
import logging

from .data_extraction import DataExtractor
from BomSourcer.exceptions import BomSourcerException
from .http_client import SupplierHTTPClient

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10

_coercer = DataExtractor("part")


@dataclass
class SearchQuery:
    """A single component search request"""
    value: str = ""
    footprint: str = ""
    component_type: str = ""
    manufacturer: str = ""
    manufacturer_part_number: str = ""
    limit: int = DEFAULT_SEARCH_LIMIT

    def __post_init__(self):
        self.value = (self.value or "").strip()
        self.footprint = (self.footprint or "").strip()
        self.component_type = (self.component_type or "").strip()
        self.manufacturer = (self.manufacturer or "").strip()
        self.manufacturer_part_number = (self.manufacturer_part_number or "").strip()
        try:
            self.limit = int(self.limit) if self.limit else DEFAULT_SEARCH_LIMIT
        except (TypeError, ValueError):
            self.limit = DEFAULT_SEARCH_LIMIT
        if self.limit <= 0:
            self.limit = DEFAULT_SEARCH_LIMIT

    def has_search_text(self) -> bool:
        return bool(self.value or self.footprint or self.manufacturer_part_number)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form echoed back by the search endpoint"""
        return {
            "value": self.value or None,
            "footprint": self.footprint or None,
            "componentType": self.component_type or None,
            "manufacturer": self.manufacturer or None,
            "manufacturerPartNumber": self.manufacturer_part_number or None,
            "limit": self.limit,
        }


@dataclass
class Part:
    """Normalized search result, identical in shape for every supplier.

    stock and price are coerced on construction so they are always
    non-negative numbers, whatever the adapter passed in.
    """
    supplier: str
    part_number: str = ""
    manufacturer: str = ""
    manufacturer_part_number: str = ""
    description: str = ""
    value: str = ""
    footprint: str = ""
    stock: int = 0
    price: float = 0.0
    currency: str = "USD"
    url: str = ""
    datasheet: str = ""
    lcsc_part: Optional[str] = None
    image: Optional[str] = None
    package: Optional[str] = None
    specifications: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.stock = _coercer.parse_int(self.stock)
        self.price = _coercer.parse_price(self.price)
        self.currency = "USD"
        for name in ("part_number", "manufacturer", "manufacturer_part_number",
                     "description", "value", "footprint", "url", "datasheet"):
            if getattr(self, name) is None:
                setattr(self, name, "")
        if self.specifications is None:
            self.specifications = {}

    def to_dict(self) -> Dict[str, Any]:
        """camelCase wire form; unset optional fields are omitted"""
        data = {
            "supplier": self.supplier,
            "partNumber": self.part_number,
            "manufacturer": self.manufacturer,
            "manufacturerPartNumber": self.manufacturer_part_number,
            "description": self.description,
            "value": self.value,
            "footprint": self.footprint,
            "stock": self.stock,
            "price": self.price,
            "currency": self.currency,
            "url": self.url,
            "datasheet": self.datasheet,
        }
        if self.lcsc_part:
            data["lcscPart"] = self.lcsc_part
        if self.image:
            data["image"] = self.image
        if self.package:
            data["package"] = self.package
        if self.specifications:
            data["specifications"] = dict(self.specifications)
        return data


@dataclass
class SupplierInfo:
    """Information about a supplier"""
    name: str
    display_name: str
    description: str
    website_url: Optional[str] = None
    api_documentation_url: Optional[str] = None
    supports_oauth: bool = False
    required_credentials: List[str] = field(default_factory=list)
    configuration_note: str = ""
    setup_steps: List[str] = field(default_factory=list)


def build_distributor_keyword(query: SearchQuery) -> str:
    """Keyword rule shared by the distributor APIs.

    value [+ footprint], prefixed with the component type; a manufacturer
    part number replaces all of it.
    """
    keyword = query.value
    if query.footprint:
        keyword = f"{keyword} {query.footprint}"
    if query.component_type:
        keyword = f"{query.component_type} {keyword}"
    if query.manufacturer_part_number:
        keyword = query.manufacturer_part_number
    return keyword.strip()


class BaseSupplier(ABC):
    """
    Abstract base class for all supplier implementations.

    Subclasses implement search_parts(), which may raise. Callers use
    search(), which never raises: an unconfigured supplier, a transport
    failure or a malformed payload all degrade to an empty list so one
    failing supplier cannot block the others.
    """

    def __init__(self):
        self._credentials: Dict[str, Any] = {}
        self._config: Dict[str, Any] = {}
        self._http_client: Optional[SupplierHTTPClient] = None
        self._extractor = DataExtractor(self.get_supplier_info().name)

    # ========== Identity ==========

    @abstractmethod
    def get_supplier_info(self) -> SupplierInfo:
        """Static identity, credential requirements and setup help"""
        pass

    @property
    def display_name(self) -> str:
        return self.get_supplier_info().display_name

    # ========== Configuration ==========

    def configure(self, credentials: Optional[Dict[str, Any]] = None, config: Optional[Dict[str, Any]] = None):
        """Replace credentials and options; called once at startup"""
        self._credentials = dict(credentials or {})
        self._config = dict(config or {})

    def get_missing_credentials(self) -> List[str]:
        """Required credentials that are absent or blank"""
        missing = []
        for name in self.get_supplier_info().required_credentials:
            value = self._credentials.get(name)
            if not value or not str(value).strip():
                missing.append(name)
        return missing

    def is_configured(self) -> bool:
        """True when every required credential is present"""
        return not self.get_missing_credentials()

    def _credential(self, name: str) -> str:
        return str(self._credentials.get(name) or "").strip()

    # ========== Search ==========

    @abstractmethod
    async def search_parts(self, query: SearchQuery) -> List[Part]:
        """Search the supplier; may raise BomSourcer exceptions"""
        pass

    async def search(self, query: SearchQuery) -> List[Part]:
        """Search the supplier, degrading every failure to an empty list"""
        info = self.get_supplier_info()

        if not self.is_configured():
            logger.info(f"{info.display_name} not configured, skipping (missing: {', '.join(self.get_missing_credentials())})")
            return []

        try:
            return await self.search_parts(query)
        except BomSourcerException as e:
            logger.warning(f"{info.display_name} search failed: {e.message}")
        except Exception as e:
            logger.error(f"{info.display_name} search error: {type(e).__name__}: {e}", exc_info=True)
        return []

    # ========== HTTP ==========

    def _get_http_client(self) -> SupplierHTTPClient:
        """Get or create the HTTP client for this supplier"""
        if self._http_client is None:
            self._http_client = SupplierHTTPClient(
                supplier_name=self.get_supplier_info().name,
                default_timeout=int(self._config.get("request_timeout", 30)),
                default_headers={"User-Agent": "BomSourcer/1.0", "Accept": "application/json"},
            )
        return self._http_client

    async def close(self):
        """Close the HTTP session, if one was opened"""
        if self._http_client is not None:
            await self._http_client.close()
