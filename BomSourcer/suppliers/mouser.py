"""
Mouser Supplier Implementation

Keyword search against the Mouser Search API v1, authenticated by API key.
"""

import logging
from typing import List, Dict, Any

from .base import BaseSupplier, Part, SearchQuery, SupplierInfo, build_distributor_keyword
from .exceptions import SupplierConnectionError
from .registry import register_supplier

logger = logging.getLogger(__name__)

MOUSER_BASE_URL = "https://api.mouser.com/api/v1"


@register_supplier("mouser")
class MouserSupplier(BaseSupplier):
    """Mouser Electronics supplier implementation"""

    def get_supplier_info(self) -> SupplierInfo:
        return SupplierInfo(
            name="mouser",
            display_name="Mouser",
            description="Electronic components distributor with an API-key protected search API",
            website_url="https://www.mouser.com",
            api_documentation_url="https://api.mouser.com/api/docs/ui/index",
            required_credentials=["api_key"],
            configuration_note="Requires MOUSER_API_KEY environment variable",
            setup_steps=[
                "1. Go to https://www.mouser.com/api/",
                "2. Request API access",
                "3. Copy your API key",
                "4. Add to your .env file:",
                "   MOUSER_API_KEY=your_api_key",
            ],
        )

    def _get_base_url(self) -> str:
        return self._config.get("base_url", MOUSER_BASE_URL).rstrip("/")

    async def search_parts(self, query: SearchQuery) -> List[Part]:
        keyword = build_distributor_keyword(query)
        if not keyword:
            return []

        url = f"{self._get_base_url()}/search/keyword"
        params = {"apiKey": self._credential("api_key")}
        search_data = {
            "SearchByKeywordRequest": {
                "keyword": keyword,
                "records": query.limit,
                "startingRecord": 0,
                "searchOptions": "",
            }
        }

        response = await self._get_http_client().post(
            url,
            endpoint_type="search_parts",
            headers={"Content-Type": "application/json"},
            params=params,
            json_data=search_data,
        )

        if not response.success:
            raise SupplierConnectionError(
                f"Mouser search error: {response.status} {response.error_message or ''}".rstrip(),
                supplier_name="mouser",
                endpoint=url,
            )

        return self._parse_search_results(response.data, query)

    def _parse_search_results(self, data: Dict[str, Any], query: SearchQuery) -> List[Part]:
        """Parse Mouser search response into Part objects"""
        data = data or {}

        errors = data.get("Errors") or []
        if isinstance(errors, list) and errors:
            first = errors[0] if isinstance(errors[0], dict) else {}
            logger.warning(f"Mouser API error: {first.get('Message', 'Unknown Error')}")
            return []

        parts = self._extractor.safe_get(data, ["SearchResults", "Parts"], [])
        if not isinstance(parts, list):
            return []

        return [self._parse_part(part, query) for part in parts if isinstance(part, dict)]

    def _parse_stock(self, part: Dict[str, Any]) -> int:
        """Prefer the numeric in-stock field; fall back to the availability text"""
        in_stock = part.get("AvailabilityInStock")
        if in_stock not in (None, ""):
            return self._extractor.parse_int(in_stock)
        return self._extractor.first_digits(part.get("Availability"))

    def _parse_part(self, part: Dict[str, Any], query: SearchQuery) -> Part:
        extractor = self._extractor

        price = extractor.parse_price(extractor.safe_get(part, ["PriceBreaks", 0, "Price"], 0))
        specifications = extractor.collect_specifications(
            part.get("ProductAttributes"), "AttributeName", "AttributeValue"
        )

        return Part(
            supplier=self.display_name,
            part_number=extractor.first_text(part, ("MouserPartNumber",)),
            manufacturer=extractor.first_text(part, ("Manufacturer",)),
            manufacturer_part_number=extractor.first_text(part, ("ManufacturerPartNumber",)),
            description=extractor.first_text(part, ("Description",)),
            value=query.value,
            footprint=query.footprint,
            stock=self._parse_stock(part),
            price=price,
            url=extractor.normalize_url(part.get("ProductDetailUrl")),
            datasheet=extractor.normalize_url(part.get("DataSheetUrl")),
            image=extractor.normalize_url(part.get("ImagePath")) or None,
            specifications=specifications,
        )
