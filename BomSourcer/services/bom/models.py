"""
BOM sourcing data model: column names, outcomes and per-row results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any

from BomSourcer.suppliers.base import Part, SearchQuery

BomRow = Dict[str, str]

# KiCad-style BOM export column headers
REFERENCE = "Reference"
VALUE = "Value"
FOOTPRINT = "Footprint"
DATASHEET = "Datasheet"
DESCRIPTION = "Description"
MANUFACTURER_NAME = "Manufacturer_Name"
MANUFACTURER_PART_NUMBER = "Manufacturer_Part_Number"
LCSC_PART = "LCSC Part #"
JLCPCB_PART = "JLCPCB Part #"
QTY = "Qty"
DNP = "DNP"
EXCLUDE_FROM_BOM = "Exclude from BOM"
CASE_CODE = "CASE CODE (METRIC)"

REQUIRED_COLUMNS = (REFERENCE, VALUE)

SUPPLIER_DISPLAY_NAMES = ("JLCPCB", "Digi-Key", "Mouser")


class SourcingStatus(str, Enum):
    """Outcome of sourcing a single BOM line"""
    MATCHED = "matched"
    NOT_FOUND = "not_found"
    SKIPPED = "skipped"
    ALREADY_SOURCED = "already_sourced"


@dataclass(frozen=True)
class RowPlan:
    """What to do with a BOM line before any supplier is contacted.

    status is None when the row should be searched with query.
    """
    status: Optional[SourcingStatus]
    notes: str = ""
    query: Optional[SearchQuery] = None

    @property
    def is_searchable(self) -> bool:
        return self.status is None and self.query is not None


def empty_search_results() -> Dict[str, List[Part]]:
    return {name: [] for name in SUPPLIER_DISPLAY_NAMES}


@dataclass(frozen=True)
class SourcingResult:
    """Final, immutable outcome for one BOM line"""
    original_row: BomRow
    status: SourcingStatus
    notes: str
    matched_part: Optional[Part] = None
    search_results: Dict[str, List[Part]] = field(default_factory=empty_search_results)
    quantity: int = 1

    def summary(self) -> Dict[str, Any]:
        """Row summary returned by the upload endpoint"""
        part = self.matched_part
        return {
            "reference": self.original_row.get(REFERENCE, ""),
            "value": self.original_row.get(VALUE, ""),
            "status": self.status.value,
            "notes": self.notes,
            "matchedPart": {
                "partNumber": part.part_number,
                "lcscPart": part.lcsc_part,
                "manufacturer": part.manufacturer,
                "manufacturerPartNumber": part.manufacturer_part_number,
                "stock": part.stock,
                "price": part.price,
            } if part else None,
        }


@dataclass
class BomSourcingReport:
    """Everything produced by sourcing one uploaded BOM"""
    results: List[SourcingResult]
    sourced_rows: List[BomRow]
    csv: str
    filename: str = ""

    @property
    def stats(self) -> Dict[str, int]:
        def count(status: SourcingStatus) -> int:
            return sum(1 for result in self.results if result.status == status)

        return {
            "total": len(self.results),
            "matched": count(SourcingStatus.MATCHED),
            "notFound": count(SourcingStatus.NOT_FOUND),
            "skipped": count(SourcingStatus.SKIPPED),
            "alreadySourced": count(SourcingStatus.ALREADY_SOURCED),
        }
