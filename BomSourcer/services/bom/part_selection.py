"""
Part selection engine.

Each supplier's candidates are scored and ranked, then a fixed supplier
priority picks the winner: JLCPCB first, then Digi-Key, then Mouser. A
lower-scoring JLCPCB part is still preferred over a better distributor part
as long as its score is above zero.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from BomSourcer.suppliers.base import Part
from BomSourcer.services.bom.models import (
    BomRow, LCSC_PART, JLCPCB_PART, MANUFACTURER_PART_NUMBER, MANUFACTURER_NAME,
    DATASHEET, DESCRIPTION, CASE_CODE,
)

logger = logging.getLogger(__name__)

Scorer = Callable[[Part], float]

IN_STOCK_POINTS = 1000
MAX_STOCK_POINTS = 100
STOCK_POINT_UNIT = 100000
MAX_PRICE_POINTS = 50
LCSC_BONUS = 50
DATASHEET_BONUS = 20


def _base_score(part: Part) -> float:
    score = 0.0
    if part.stock > 0:
        score += IN_STOCK_POINTS
    score += min(part.stock / STOCK_POINT_UNIT, MAX_STOCK_POINTS)
    if part.price > 0:
        score += max(0.0, MAX_PRICE_POINTS - part.price * 10)
    return score


def score_jlcpcb_part(part: Part) -> float:
    return _base_score(part) + (LCSC_BONUS if part.lcsc_part else 0)


def score_distributor_part(part: Part) -> float:
    return _base_score(part) + (DATASHEET_BONUS if part.datasheet else 0)


def rank_parts(parts: Sequence[Part], scorer: Scorer) -> List[Tuple[Part, float]]:
    """Parts paired with their score, best first; ties keep supplier order"""
    scored = [(part, scorer(part)) for part in parts]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def _matched_note(supplier: str, part: Part) -> str:
    if supplier == "JLCPCB" and part.lcsc_part:
        return f"Matched via JLCPCB (LCSC: {part.lcsc_part}, Stock: {part.stock:,})"
    # JLCSearch rows can lack an LCSC code; name the part by its own number instead
    identifier = part.part_number or part.manufacturer_part_number
    return f"Matched via {supplier} ({identifier}, Stock: {part.stock:,})"


def select_best_part(jlcpcb: Sequence[Part],
                     digikey: Sequence[Part],
                     mouser: Sequence[Part]) -> Tuple[Optional[Part], str]:
    """Walk suppliers in priority order; the first with a positive top score wins"""
    cascade = (
        ("JLCPCB", jlcpcb or [], score_jlcpcb_part),
        ("Digi-Key", digikey or [], score_distributor_part),
        ("Mouser", mouser or [], score_distributor_part),
    )

    for supplier, parts, scorer in cascade:
        if not parts:
            continue
        best, score = rank_parts(parts, scorer)[0]
        if score > 0:
            logger.debug(f"Selected {best.part_number} from {supplier} (score {score:.1f})")
            return best, _matched_note(supplier, best)
        logger.debug(f"Top {supplier} candidate scored 0, trying next supplier")

    return None, "No matches found"


# BOM column -> Part attribute, filled only when the row cell is empty
GAP_FILL_COLUMNS = (
    (MANUFACTURER_PART_NUMBER, "manufacturer_part_number"),
    (MANUFACTURER_NAME, "manufacturer"),
    (DATASHEET, "datasheet"),
    (DESCRIPTION, "description"),
    (CASE_CODE, "package"),
)


def merge_sourced_data(row: BomRow, part: Optional[Part]) -> BomRow:
    """Copy of row with the selected part's data filled into empty columns"""
    merged = dict(row)
    if part is None:
        return merged

    if part.lcsc_part:
        merged[LCSC_PART] = part.lcsc_part
        merged[JLCPCB_PART] = part.lcsc_part

    for column, attribute in GAP_FILL_COLUMNS:
        value = getattr(part, attribute) or ""
        if value and not merged.get(column):
            merged[column] = value

    return merged
