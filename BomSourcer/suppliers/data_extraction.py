"""
Coercion helpers shared by the supplier payload parsers.

Supplier APIs disagree on field names, send stock as "15,900,000" or
"5,234 In Stock", and prices as "$0.0123". These helpers turn such values
into the plain numbers and strings a Part holds. Every numeric helper
returns a finite, non-negative number; absent or malformed values become 0.
"""

import math
import re
import logging
from typing import Dict, Any, List, Optional, Union, Iterable

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^[+-]?\d+")
_FIRST_DIGITS = re.compile(r"\d+")
_PRICE_NOISE = re.compile(r"[^\d.+-]")

PathKey = Union[str, int]


class DataExtractor:
    """Payload reader bound to one supplier name (used in debug logs)"""

    def __init__(self, supplier_name: str):
        self.supplier_name = supplier_name

    def safe_get(self, data: Any, keys: Union[str, List[PathKey]], default: Any = None) -> Any:
        """Follow a path of dict keys and list indexes, returning default on any gap.

            extractor.safe_get(product, ["StandardPricing", 0, "UnitPrice"], 0.0)
        """
        path = [keys] if isinstance(keys, str) else keys

        node = data
        for step in path:
            if isinstance(node, dict):
                node = node.get(step)
            elif isinstance(node, list) and isinstance(step, int) and 0 <= step < len(node):
                node = node[step]
            else:
                return default
            if node is None:
                return default

        return default if node is None else node

    def first_present(self, data: Dict[str, Any], keys: Iterable[str], default: Any = None) -> Any:
        """Return the value of the first key that holds a non-empty value.

        Suppliers rename fields between API versions; callers list the
        alternatives in priority order.
        """
        if not isinstance(data, dict):
            return default

        for key in keys:
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return value

        return default

    def first_text(self, data: Dict[str, Any], keys: Iterable[str]) -> str:
        """Like first_present, but always returns a stripped string."""
        value = self.first_present(data, keys, "")
        return str(value).strip()

    # Numbers

    def parse_int(self, value: Any) -> int:
        """Parse a stock-like value into a non-negative int.

        Accepts ints, floats and strings such as "15,900,000" or "1200 pcs".
        """
        if value is None or isinstance(value, bool):
            return 0

        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return 0
            return max(0, int(value))

        cleaned = str(value).replace(",", "").strip()
        match = _LEADING_INT.match(cleaned)
        if not match:
            if cleaned:
                logger.debug(f"{self.supplier_name}: could not parse integer from {value!r}")
            return 0

        return max(0, int(match.group(0)))

    def parse_price(self, value: Any) -> float:
        """Parse a price-like value into a non-negative float.

        Strips currency symbols and thousands separators: "$1,234.50" -> 1234.5.
        """
        if value is None or isinstance(value, bool):
            return 0.0

        if isinstance(value, (int, float)):
            number = float(value)
        else:
            cleaned = _PRICE_NOISE.sub("", str(value).replace(",", ""))
            if not cleaned:
                return 0.0
            try:
                number = float(cleaned)
            except ValueError:
                logger.debug(f"{self.supplier_name}: could not parse price from {value!r}")
                return 0.0

        if not math.isfinite(number) or number < 0:
            return 0.0
        return number

    def first_digits(self, text: Any) -> int:
        """Extract the first run of digits from free text ("5,234 In Stock" -> 5234)."""
        if text is None:
            return 0

        match = _FIRST_DIGITS.search(str(text).replace(",", ""))
        return int(match.group(0)) if match else 0

    # Specifications

    def collect_specifications(
        self,
        items: Any,
        name_key: str,
        value_key: str
    ) -> Dict[str, str]:
        """Collapse a list of {name, value} records into a name -> value mapping."""
        specifications: Dict[str, str] = {}
        if not isinstance(items, list):
            return specifications

        for item in items:
            if not isinstance(item, dict):
                continue
            name = item.get(name_key)
            value = item.get(value_key)
            if name and value not in (None, ""):
                specifications[str(name)] = str(value)

        return specifications

    # URLs

    @staticmethod
    def normalize_url(url: Optional[str]) -> str:
        """Normalize protocol-relative URLs ("//host/path") to https."""
        if not url:
            return ""
        url = str(url).strip()
        if url.startswith("//"):
            return "https:" + url
        return url
