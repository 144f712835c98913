"""
DigiKey Supplier Implementation

Uses the DigiKey Product Information API with the OAuth2 client credentials
grant (backend-only, no browser redirect). The bearer token is cached on the
supplier instance until five minutes before it expires.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Dict, Any, Optional

from .base import BaseSupplier, Part, SearchQuery, SupplierInfo, build_distributor_keyword
from .exceptions import SupplierAuthenticationError, SupplierConfigurationError, SupplierConnectionError
from .registry import register_supplier

logger = logging.getLogger(__name__)

PRODUCTION_BASE_URL = "https://api.digikey.com"
SANDBOX_BASE_URL = "https://sandbox-api.digikey.com"

# Tokens are refreshed this long before DigiKey says they expire
TOKEN_EXPIRY_MARGIN = timedelta(minutes=5)


@register_supplier("digikey")
class DigiKeySupplier(BaseSupplier):
    """DigiKey supplier using the client credentials OAuth2 flow"""

    def __init__(self):
        super().__init__()
        self._access_token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    def get_supplier_info(self) -> SupplierInfo:
        return SupplierInfo(
            name="digikey",
            display_name="Digi-Key",
            description="Global electronic components distributor with an OAuth2-protected product API",
            website_url="https://www.digikey.com",
            api_documentation_url="https://developer.digikey.com/",
            supports_oauth=True,
            required_credentials=["client_id", "client_secret"],
            configuration_note="Requires DIGIKEY_CLIENT_ID and DIGIKEY_CLIENT_SECRET environment variables",
            setup_steps=[
                "1. Go to https://developer.digikey.com/",
                "2. Create a Digi-Key API account",
                "3. Create a new Application",
                "4. Set the Redirect URI to: http://localhost:8000",
                "5. Copy the Client ID and Client Secret",
                "6. Add to your .env file:",
                "   DIGIKEY_CLIENT_ID=your_client_id",
                "   DIGIKEY_CLIENT_SECRET=your_client_secret",
            ],
        )

    def _is_sandbox(self) -> bool:
        value = self._config.get("sandbox", False)
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)

    def _get_base_url(self) -> str:
        return SANDBOX_BASE_URL if self._is_sandbox() else PRODUCTION_BASE_URL

    def _get_token_url(self) -> str:
        return f"{self._get_base_url()}/v1/oauth2/token"

    # ========== Authentication ==========

    def _has_valid_cached_token(self) -> bool:
        """Check if we have a cached token that has not reached its refresh point"""
        if not self._access_token or not self._token_expires_at:
            return False
        return datetime.now() < self._token_expires_at

    def _cache_token(self, access_token: str, expires_in: int) -> None:
        """Record the token and the moment it should be refreshed"""
        self._access_token = access_token
        self._token_expires_at = datetime.now() + timedelta(seconds=expires_in) - TOKEN_EXPIRY_MARGIN

    async def get_access_token(self) -> str:
        """Return the cached token, fetching a new one when it is missing or near expiry.

        Concurrent callers that all see an expired token each fetch their own;
        the last one to finish is cached. Tokens are interchangeable.
        """
        if self._has_valid_cached_token():
            return self._access_token

        missing = self.get_missing_credentials()
        if missing:
            raise SupplierConfigurationError(
                "DigiKey credentials are not configured", supplier_name="digikey", config_field=", ".join(missing)
            )

        data = {
            "client_id": self._credential("client_id"),
            "client_secret": self._credential("client_secret"),
            "grant_type": "client_credentials",
        }
        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        response = await self._get_http_client().post(
            self._get_token_url(), endpoint_type="client_credentials", headers=headers, data=data
        )

        if not response.success:
            raise SupplierAuthenticationError(
                f"DigiKey auth failed: {response.status} {response.error_message or ''}".rstrip(),
                supplier_name="digikey",
            )

        access_token = self._extractor.safe_get(response.data, "access_token")
        if not access_token:
            raise SupplierAuthenticationError("DigiKey auth response did not include an access token", supplier_name="digikey")

        expires_in = self._extractor.parse_int(response.data.get("expires_in")) or 600
        self._cache_token(access_token, expires_in)
        logger.info(f"DigiKey: obtained access token (expires in {expires_in}s)")
        return access_token

    # ========== Search ==========

    async def search_parts(self, query: SearchQuery) -> List[Part]:
        keyword = build_distributor_keyword(query)
        if not keyword:
            return []

        token = await self.get_access_token()

        headers = {
            "Authorization": f"Bearer {token}",
            "X-DIGIKEY-Client-Id": self._credential("client_id"),
            "Content-Type": "application/json",
        }
        params = {"Keyword": keyword, "limit": str(query.limit)}
        url = f"{self._get_base_url()}/Products/v3/Search/Keyword"

        response = await self._get_http_client().get(url, endpoint_type="search_parts", headers=headers, params=params)

        if not response.success:
            raise SupplierConnectionError(
                f"DigiKey search error: {response.status} {response.error_message or ''}".rstrip(),
                supplier_name="digikey",
                endpoint=url,
            )

        products = response.data.get("Products") or []
        if not isinstance(products, list):
            return []

        return [self._parse_product(product, query) for product in products if isinstance(product, dict)]

    # ========== Parsing ==========

    def _parse_product(self, product: Dict[str, Any], query: SearchQuery) -> Part:
        extractor = self._extractor

        digikey_pn = extractor.first_text(product, ("DigiKeyPartNumber",))
        manufacturer = extractor.safe_get(product, ["Manufacturer", "Name"]) or extractor.safe_get(product, ["Manufacturer", "Value"], "")
        unit_price = extractor.safe_get(product, ["StandardPricing", 0, "UnitPrice"], 0)

        parameters = product.get("Parameters")
        specifications = extractor.collect_specifications(parameters, "Parameter", "Value")

        return Part(
            supplier=self.display_name,
            part_number=digikey_pn,
            manufacturer=str(manufacturer),
            manufacturer_part_number=extractor.first_text(product, ("ManufacturerPartNumber",)),
            description=extractor.first_text(product, ("DetailedDescription", "ProductDescription")),
            value=query.value,
            footprint=query.footprint,
            stock=extractor.parse_int(product.get("QuantityAvailable")),
            price=extractor.parse_price(unit_price),
            url=extractor.normalize_url(product.get("ProductUrl")) or f"https://www.digikey.com/product-detail/en/{digikey_pn}",
            datasheet=extractor.normalize_url(product.get("PrimaryDatasheet")),
            image=extractor.normalize_url(product.get("PrimaryPhoto")) or None,
            package=specifications.get("Package / Case") or None,
            specifications=specifications,
        )
