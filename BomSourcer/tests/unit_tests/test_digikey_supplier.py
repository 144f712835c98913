"""
Unit tests for DigiKey supplier implementation.

Tests client-credentials token caching, keyword construction and product
parsing without making real DigiKey API calls.
"""

import pytest
from unittest.mock import Mock, AsyncMock
from datetime import datetime, timedelta

from BomSourcer.suppliers.base import SearchQuery, build_distributor_keyword
from BomSourcer.suppliers.digikey import DigiKeySupplier, PRODUCTION_BASE_URL, SANDBOX_BASE_URL
from BomSourcer.exceptions import SupplierConfigurationError
from BomSourcer.suppliers.http_client import HTTPResponse


def ok(data):
    return HTTPResponse(status=200, data=data, headers={}, url="", duration_ms=1)


TOKEN_RESPONSE = {"access_token": "token-1", "expires_in": 600}


class TestDigiKeySupplierBasics:
    """Test basic DigiKey supplier functionality"""

    def setup_method(self):
        self.supplier = DigiKeySupplier()

    def test_supplier_info(self):
        info = self.supplier.get_supplier_info()
        assert info.name == "digikey"
        assert info.display_name == "Digi-Key"
        assert info.supports_oauth is True
        assert info.required_credentials == ["client_id", "client_secret"]
        assert info.setup_steps

    def test_unconfigured_without_both_credentials(self):
        assert self.supplier.is_configured() is False
        self.supplier.configure({"client_id": "id", "client_secret": "  "})
        assert self.supplier.is_configured() is False
        assert self.supplier.get_missing_credentials() == ["client_secret"]

    def test_configured(self):
        self.supplier.configure({"client_id": "id", "client_secret": "secret"})
        assert self.supplier.is_configured() is True

    def test_sandbox_toggle(self):
        self.supplier.configure({}, {"sandbox": "true"})
        assert self.supplier._get_base_url() == SANDBOX_BASE_URL
        self.supplier.configure({}, {"sandbox": False})
        assert self.supplier._get_base_url() == PRODUCTION_BASE_URL

    @pytest.mark.asyncio
    async def test_unconfigured_search_makes_no_calls(self):
        client = Mock()
        client.post = AsyncMock()
        client.get = AsyncMock()
        self.supplier._http_client = client

        assert await self.supplier.search(SearchQuery(value="100K")) == []
        client.post.assert_not_called()
        client.get.assert_not_called()


class TestKeyword:

    def test_value_footprint_and_type(self):
        query = SearchQuery(value="100K", footprint="0402", component_type="resistor")
        assert build_distributor_keyword(query) == "resistor 100K 0402"

    def test_mpn_overrides(self):
        query = SearchQuery(value="100K", footprint="0402", manufacturer_part_number="RC0402FR-07100KL")
        assert build_distributor_keyword(query) == "RC0402FR-07100KL"

    def test_empty(self):
        assert build_distributor_keyword(SearchQuery()) == ""


class TestTokenCaching:
    """The bearer token is reused until five minutes before expiry"""

    def setup_method(self):
        self.supplier = DigiKeySupplier()
        self.supplier.configure({"client_id": "id", "client_secret": "secret"})
        self.client = Mock()
        self.client.post = AsyncMock(return_value=ok(TOKEN_RESPONSE))
        self.client.get = AsyncMock(return_value=ok({"Products": []}))
        self.supplier._http_client = self.client

    @pytest.mark.asyncio
    async def test_token_fetched_once_and_reused(self):
        assert await self.supplier.get_access_token() == "token-1"
        assert await self.supplier.get_access_token() == "token-1"
        assert self.client.post.await_count == 1

        call = self.client.post.call_args
        assert call.args[0] == f"{PRODUCTION_BASE_URL}/v1/oauth2/token"
        assert call.kwargs["data"]["grant_type"] == "client_credentials"

    @pytest.mark.asyncio
    async def test_expiry_includes_safety_margin(self):
        before = datetime.now()
        await self.supplier.get_access_token()
        # 600s lifetime minus the 300s margin
        assert self.supplier._token_expires_at <= before + timedelta(seconds=301)
        assert self.supplier._token_expires_at >= before + timedelta(seconds=299)

    @pytest.mark.asyncio
    async def test_expired_token_is_refreshed(self):
        await self.supplier.get_access_token()
        self.supplier._token_expires_at = datetime.now() - timedelta(seconds=1)
        self.client.post.return_value = ok({"access_token": "token-2", "expires_in": 600})

        assert await self.supplier.get_access_token() == "token-2"
        assert self.client.post.await_count == 2

    @pytest.mark.asyncio
    async def test_instances_do_not_share_tokens(self):
        await self.supplier.get_access_token()
        other = DigiKeySupplier()
        assert other._has_valid_cached_token() is False

    @pytest.mark.asyncio
    async def test_token_requires_credentials(self):
        supplier = DigiKeySupplier()
        supplier._http_client = self.client

        with pytest.raises(SupplierConfigurationError) as exc_info:
            await supplier.get_access_token()

        assert exc_info.value.details["config_field"] == "client_id, client_secret"
        self.client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_auth_failure_degrades_to_empty(self):
        self.client.post.return_value = HTTPResponse.failed("u", "invalid_client", status=401)

        assert await self.supplier.search(SearchQuery(value="100K")) == []
        self.client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_sends_bearer_and_client_id(self):
        await self.supplier.search(SearchQuery(value="100K", footprint="0402", component_type="resistor", limit=5))

        call = self.client.get.call_args
        assert call.args[0] == f"{PRODUCTION_BASE_URL}/Products/v3/Search/Keyword"
        assert call.kwargs["headers"]["Authorization"] == "Bearer token-1"
        assert call.kwargs["headers"]["X-DIGIKEY-Client-Id"] == "id"
        assert call.kwargs["params"] == {"Keyword": "resistor 100K 0402", "limit": "5"}

    @pytest.mark.asyncio
    async def test_search_error_status_degrades_to_empty(self):
        self.client.get.return_value = HTTPResponse.failed("u", "HTTP 500")
        assert await self.supplier.search(SearchQuery(value="100K")) == []


class TestProductParsing:

    def setup_method(self):
        self.supplier = DigiKeySupplier()
        self.query = SearchQuery(value="100K", footprint="0402")

    def test_nested_fields(self):
        part = self.supplier._parse_product({
            "DigiKeyPartNumber": "311-100KLRCT-ND",
            "ManufacturerPartNumber": "RC0402FR-07100KL",
            "Manufacturer": {"Value": "YAGEO"},
            "DetailedDescription": "RES 100K OHM 1% 1/16W 0402",
            "ProductDescription": "RES 100K",
            "QuantityAvailable": 1250000,
            "StandardPricing": [{"BreakQuantity": 1, "UnitPrice": 0.1}],
            "PrimaryDatasheet": "//www.yageo.com/ds.pdf",
            "Parameters": [
                {"Parameter": "Resistance", "Value": "100 kOhms"},
                {"Parameter": "Package / Case", "Value": "0402 (1005 Metric)"},
            ],
        }, self.query)

        assert part.supplier == "Digi-Key"
        assert part.part_number == "311-100KLRCT-ND"
        assert part.manufacturer == "YAGEO"
        assert part.description == "RES 100K OHM 1% 1/16W 0402"
        assert part.stock == 1250000
        assert part.price == pytest.approx(0.1)
        assert part.datasheet == "https://www.yageo.com/ds.pdf"
        assert part.specifications["Resistance"] == "100 kOhms"
        assert part.package == "0402 (1005 Metric)"
        assert part.url == "https://www.digikey.com/product-detail/en/311-100KLRCT-ND"

    def test_manufacturer_name_preferred(self):
        part = self.supplier._parse_product({"Manufacturer": {"Name": "Yageo", "Value": "YAGEO"}}, self.query)
        assert part.manufacturer == "Yageo"

    def test_missing_everything(self):
        part = self.supplier._parse_product({"StandardPricing": None, "Parameters": "bad"}, self.query)
        assert part.stock == 0
        assert part.price == 0.0
        assert part.datasheet == ""
        assert part.specifications == {}
