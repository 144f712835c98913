"""
BOM row interpretation.

Turns one BOM line into a RowPlan: either a terminal status (skipped,
already sourced, nothing to search) or a SearchQuery for the suppliers.
"""

import re
from typing import Tuple

from BomSourcer.suppliers.base import SearchQuery, DEFAULT_SEARCH_LIMIT
from BomSourcer.services.bom.models import (
    BomRow, RowPlan, SourcingStatus,
    REFERENCE, VALUE, FOOTPRINT, CASE_CODE, QTY, DNP, EXCLUDE_FROM_BOM,
    MANUFACTURER_PART_NUMBER, LCSC_PART, JLCPCB_PART,
)

EXCLUDED_VALUES = ("yes", "true", "excluded from bom")
DNP_VALUES = ("yes", "true")

# Checked in order; the first matching prefix wins
REFERENCE_PREFIXES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("C",), "capacitor"),
    (("R",), "resistor"),
    (("L",), "inductor"),
    (("LED",), "led"),
    (("D",), "diode"),
    (("U",), "ic"),
    (("Y", "X"), "crystal"),
    (("S",), "switch"),
    (("J",), "connector"),
    (("MIC",), "microphone"),
)

_METRIC_FOOTPRINT = re.compile(r"(\d{4})Metric", re.IGNORECASE)
_BARE_FOOTPRINT = re.compile(r"\b(\d{4})\b")

_CAPACITOR_VALUE = re.compile(r"^[0-9.]+[PNµUF]", re.IGNORECASE)
_RESISTOR_VALUE = re.compile(r"^[0-9.]+[KMR]", re.IGNORECASE)
_INDUCTOR_VALUE = re.compile(r"^[0-9.]+[NH]", re.IGNORECASE)


def _cell(row: BomRow, column: str) -> str:
    return (row.get(column) or "").strip()


def extract_footprint(row: BomRow) -> str:
    """Metric size code from the Footprint column, else the case code column"""
    footprint = _cell(row, FOOTPRINT)
    if footprint:
        # e.g. "apollo4_SE:SMT_0201_0603Metric"
        match = _METRIC_FOOTPRINT.search(footprint) or _BARE_FOOTPRINT.search(footprint)
        if match:
            return match.group(1)

    return _cell(row, CASE_CODE)


def infer_component_type(value: str, reference: str) -> str:
    """Component category from the reference designator, else from the value"""
    ref = (reference or "").strip().upper()
    val = (value or "").strip().upper()

    for prefixes, component_type in REFERENCE_PREFIXES:
        if ref.startswith(prefixes):
            return component_type

    if _CAPACITOR_VALUE.match(val) or "FARAD" in val:
        return "capacitor"
    if _RESISTOR_VALUE.match(val) or "OHM" in val:
        return "resistor"
    if _INDUCTOR_VALUE.match(val) and val.endswith("H"):
        return "inductor"

    return ""


def calculate_quantity(row: BomRow) -> int:
    """Explicit Qty when positive, else the number of reference designators"""
    qty = _cell(row, QTY)
    match = re.match(r"[+-]?\d+", qty)
    if match and int(match.group(0)) > 0:
        return int(match.group(0))

    reference = _cell(row, REFERENCE)
    if reference:
        return len([ref for ref in reference.split(",") if ref.strip()])

    return 1


def classify_row(row: BomRow) -> RowPlan:
    """Decide what to do with a BOM line; the first matching rule wins"""
    if _cell(row, EXCLUDE_FROM_BOM).lower() in EXCLUDED_VALUES:
        return RowPlan(SourcingStatus.SKIPPED, "Excluded from BOM")

    manufacturer_part_number = _cell(row, MANUFACTURER_PART_NUMBER)
    if _cell(row, DNP).lower() in DNP_VALUES or manufacturer_part_number.upper() == "DNP":
        return RowPlan(SourcingStatus.SKIPPED, "DNP (Do Not Populate)")

    if _cell(row, LCSC_PART) or _cell(row, JLCPCB_PART):
        return RowPlan(SourcingStatus.ALREADY_SOURCED, "Already has LCSC/JLCPCB part number")

    value = _cell(row, VALUE)
    if not value and not manufacturer_part_number:
        return RowPlan(SourcingStatus.NOT_FOUND, "No value or part number to search")

    query = SearchQuery(
        value=value,
        footprint=extract_footprint(row),
        component_type=infer_component_type(value, _cell(row, REFERENCE)),
        manufacturer_part_number=manufacturer_part_number,
        limit=DEFAULT_SEARCH_LIMIT,
    )
    return RowPlan(None, query=query)
