"""
JLCPCB Supplier Implementation

Searches the free JLCSearch catalog (jlcsearch.tscircuit.com), which mirrors
the JLCPCB/LCSC parts library. No credentials are required.

JLCSearch exposes a generic component list plus per-category lists. The
category lists are tried first when the caller (or the search term itself)
tells us what kind of part we are looking for.
"""

import logging
import re
from types import MappingProxyType
from typing import List, Dict, Any, Optional

from .base import BaseSupplier, Part, SearchQuery, SupplierInfo
from .registry import register_supplier

logger = logging.getLogger(__name__)

JLCSEARCH_BASE_URL = "https://jlcsearch.tscircuit.com"
GENERIC_ENDPOINT = "components"

# component category -> JLCSearch list endpoint
CATEGORY_ENDPOINTS = MappingProxyType({
    "resistor": "resistors",
    "capacitor": "capacitors",
    "led": "leds",
    "diode": "diodes",
    "ic": "microcontrollers",
    "microcontroller": "microcontrollers",
    "mcu": "microcontrollers",
    "mosfet": "mosfets",
    "transistor": "bjt_transistors",
    "bjt": "bjt_transistors",
    "regulator": "voltage_regulators",
    "voltage_regulator": "voltage_regulators",
    "ldo": "ldos",
    "boost_converter": "boost_converters",
    "connector": "headers",
    "header": "headers",
    "usb_c": "usb_c_connectors",
    "switch": "switches",
    "potentiometer": "potentiometers",
    "fuse": "fuses",
    "relay": "relays",
    "accelerometer": "accelerometers",
    "adc": "adcs",
    "dac": "dacs",
    "fpga": "fpgas",
})

STANDARD_FOOTPRINTS = ("0402", "0603", "0805", "1206", "1210", "2010", "2512")

_FOUR_DIGIT_CODE = re.compile(r"\b(\d{4})\b")
_RESISTOR_TERM = re.compile(r"^\d+(?:\.\d+)?\s*[KR]", re.IGNORECASE)
_CAPACITOR_TERM = re.compile(r"^\d+(?:\.\d+)?\s*[PNUµF]", re.IGNORECASE)


def normalize_footprint(footprint: str) -> str:
    """Reduce a free-text footprint to an imperial size code when possible.

    "0402 (1005 Metric)" -> "0402"; "R_0603" -> "0603"; "SOT-23" -> "SOT-23"
    """
    if not footprint:
        return ""

    match = _FOUR_DIGIT_CODE.search(footprint)
    if match:
        return match.group(1)

    lowered = footprint.lower()
    for code in STANDARD_FOOTPRINTS:
        if code in lowered:
            return code

    return footprint


def infer_category_from_term(term: str) -> Optional[str]:
    """Best-effort category guess from the search term ("100K" -> resistor, "1uF" -> capacitor)"""
    if not term:
        return None
    term = term.strip()
    if _RESISTOR_TERM.match(term):
        return "resistor"
    if _CAPACITOR_TERM.match(term):
        return "capacitor"
    return None


def format_resistance(ohms: float) -> str:
    if ohms >= 1_000_000:
        return f"{ohms / 1_000_000:g}MΩ"
    if ohms >= 1_000:
        return f"{ohms / 1_000:g}kΩ"
    return f"{ohms:g}Ω"


@register_supplier("jlcpcb")
class JLCPCBSupplier(BaseSupplier):
    """JLCPCB parts catalog via the free JLCSearch API"""

    def get_supplier_info(self) -> SupplierInfo:
        return SupplierInfo(
            name="jlcpcb",
            display_name="JLCPCB",
            description="JLCPCB/LCSC assembly parts library via the free JLCSearch API",
            website_url="https://jlcpcb.com/parts",
            api_documentation_url="https://jlcsearch.tscircuit.com",
            configuration_note="Uses free JLCSearch API - no configuration needed",
        )

    def _get_base_url(self) -> str:
        return self._config.get("base_url", JLCSEARCH_BASE_URL).rstrip("/")

    # ========== Query Building ==========

    @staticmethod
    def build_search_term(query: SearchQuery) -> str:
        """MPN beats manufacturer + value, which beats value alone"""
        if query.manufacturer_part_number:
            return query.manufacturer_part_number
        if query.manufacturer:
            return f"{query.manufacturer} {query.value}".strip()
        return query.value

    def _build_params(self, term: str, query: SearchQuery) -> Dict[str, str]:
        params = {
            "search": term,
            "limit": str(query.limit or 20),
            "full": "true",
        }
        if query.footprint:
            package = normalize_footprint(query.footprint)
            if package:
                params["package"] = package
        return params

    # ========== Search ==========

    async def search_parts(self, query: SearchQuery) -> List[Part]:
        term = self.build_search_term(query).strip()
        if not term:
            return []

        params = self._build_params(term, query)
        tried = set()
        components: List[Dict[str, Any]] = []

        category = (query.component_type or "").strip().lower()
        if category in CATEGORY_ENDPOINTS:
            endpoint = CATEGORY_ENDPOINTS[category]
            tried.add(endpoint)
            components = await self._fetch_components(endpoint, params)

        if not components and GENERIC_ENDPOINT not in tried:
            tried.add(GENERIC_ENDPOINT)
            components = await self._fetch_components(GENERIC_ENDPOINT, params)

        if not components:
            inferred = infer_category_from_term(term)
            endpoint = CATEGORY_ENDPOINTS.get(inferred) if inferred else None
            if endpoint and endpoint not in tried:
                logger.debug(f"JLCPCB: retrying '{term}' as inferred category '{inferred}'")
                components = await self._fetch_components(endpoint, params)

        results = [self._parse_component(component, query) for component in components if isinstance(component, dict)]
        results = [part for part in results if part.part_number or part.lcsc_part]

        results.sort(key=lambda part: (-part.stock, part.price))
        return results[:query.limit]

    async def _fetch_components(self, endpoint: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """Fetch one JLCSearch list endpoint; failures read as no results"""
        url = f"{self._get_base_url()}/{endpoint}/list.json"
        response = await self._get_http_client().get(url, endpoint_type=f"search_{endpoint}", params=params)

        if not response.success:
            logger.warning(f"JLCSearch {endpoint} error: {response.status} {response.error_message or ''}".rstrip())
            return []

        return self._extract_component_list(response.data, endpoint)

    @staticmethod
    def _extract_component_list(data: Dict[str, Any], endpoint: str) -> List[Dict[str, Any]]:
        """Category endpoints key the list by category name, the generic one by "components" """
        if not isinstance(data, dict):
            return []

        for key in ("components", endpoint):
            value = data.get(key)
            if isinstance(value, list):
                return value

        for value in data.values():
            if isinstance(value, list):
                return value

        return []

    # ========== Parsing ==========

    @staticmethod
    def normalize_lcsc_code(component: Dict[str, Any]) -> str:
        """Return the "C<number>" form from whichever field the API used"""
        lcsc = component.get("lcsc")
        if lcsc not in (None, "", 0):
            code = str(lcsc).strip()
            if code[:1] in ("C", "c"):
                return "C" + code[1:]
            return f"C{code}"

        lcsc_code = component.get("lcscCode")
        if lcsc_code:
            return str(lcsc_code).strip()

        lcsc_id = component.get("lcsc_id")
        if lcsc_id not in (None, "", 0):
            return f"C{str(lcsc_id).strip()}"

        return ""

    def _synthesize_description(self, component: Dict[str, Any]) -> str:
        """Resistor lists carry numeric fields instead of a description"""
        resistance = component.get("resistance")
        if resistance in (None, ""):
            return ""

        ohms = self._extractor.parse_price(resistance)
        pieces = [format_resistance(ohms)]

        tolerance = component.get("tolerance_fraction")
        if tolerance not in (None, ""):
            percent = self._extractor.parse_price(tolerance) * 100
            pieces.append(f"±{round(percent, 4):g}%")

        pieces.append("Resistor")
        return " ".join(pieces)

    def _parse_component(self, component: Dict[str, Any], query: SearchQuery) -> Part:
        extractor = self._extractor
        lcsc_part = self.normalize_lcsc_code(component)

        stock = extractor.parse_int(extractor.first_present(component, ("stock", "stockQty", "quantity")))
        price = extractor.parse_price(extractor.first_present(component, ("price", "unit_price")))

        manufacturer = extractor.first_text(component, ("mfr", "manufacturer", "Manufacturer"))
        description = extractor.first_text(component, ("description", "Description"))
        if not description:
            description = self._synthesize_description(component)
        package = extractor.first_text(component, ("package", "Package", "footprint"))
        mpn = extractor.first_text(component, ("mfrPartNo", "manufacturer_part_number"))

        return Part(
            supplier=self.display_name,
            part_number=mpn,
            manufacturer=manufacturer,
            manufacturer_part_number=mpn,
            description=description,
            value=query.value,
            footprint=package or query.footprint,
            stock=stock,
            price=price,
            url=f"https://jlcpcb.com/partdetail/{lcsc_part}" if lcsc_part else "https://jlcpcb.com/",
            datasheet=extractor.normalize_url(component.get("datasheet")),
            lcsc_part=lcsc_part or None,
            image=extractor.normalize_url(component.get("image")) or None,
            package=package or None,
        )
