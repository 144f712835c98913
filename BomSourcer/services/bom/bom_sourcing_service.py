"""
BOM Sourcing Service

Walks an uploaded BOM one row at a time: classify the row, search every
supplier for searchable rows, pick the best part and merge it back into the
row. Rows are handled strictly in sequence so upstream load stays bounded.
"""

import logging
from typing import List, Optional, Sequence

from BomSourcer.exceptions import BomParseError
from BomSourcer.services.parts_search_service import PartsSearchService, DEFAULT_SUPPLIERS
from BomSourcer.services.bom.models import (
    BomRow, BomSourcingReport, SourcingResult, SourcingStatus, empty_search_results,
    REFERENCE, VALUE,
)
from BomSourcer.services.bom.row_interpreter import classify_row, calculate_quantity
from BomSourcer.services.bom.part_selection import select_best_part, merge_sourced_data
from BomSourcer.services.bom.bom_csv import parse_bom_csv, validate_bom_headers, rows_to_csv, output_filename

logger = logging.getLogger(__name__)

EMPTY_BOM_MESSAGE = "Could not parse BOM file or file is empty"


class BomSourcingService:
    """Sources every line of a BOM through a PartsSearchService"""

    def __init__(self, search_service: PartsSearchService):
        self.search_service = search_service

    async def process_row(self, row: BomRow) -> SourcingResult:
        quantity = calculate_quantity(row)
        plan = classify_row(row)

        if not plan.is_searchable:
            return SourcingResult(
                original_row=row,
                status=plan.status,
                notes=plan.notes,
                quantity=quantity,
            )

        query = plan.query
        logger.info(f"Searching for: {query.value} ({query.component_type}, {query.footprint})")

        found = await self.search_service.search(query, enabled=DEFAULT_SUPPLIERS)
        search_results = empty_search_results()
        search_results.update(found)

        part, notes = select_best_part(
            search_results["JLCPCB"],
            search_results["Digi-Key"],
            search_results["Mouser"],
        )

        return SourcingResult(
            original_row=row,
            status=SourcingStatus.MATCHED if part else SourcingStatus.NOT_FOUND,
            notes=notes,
            matched_part=part,
            search_results=search_results,
            quantity=quantity,
        )

    async def source_bom(self, rows: Sequence[BomRow], filename: str = "") -> BomSourcingReport:
        """Process rows in order, one fully finishing before the next starts"""
        results: List[SourcingResult] = []
        sourced_rows: List[BomRow] = []

        for index, row in enumerate(rows, start=1):
            result = await self.process_row(row)
            logger.info(
                f"[{index}/{len(rows)}] {row.get(REFERENCE, '')} {row.get(VALUE, '')}: "
                f"{result.status.value} - {result.notes}"
            )
            results.append(result)
            if result.status == SourcingStatus.MATCHED:
                sourced_rows.append(merge_sourced_data(row, result.matched_part))
            else:
                sourced_rows.append(row)

        report = BomSourcingReport(
            results=results,
            sourced_rows=sourced_rows,
            csv=rows_to_csv(sourced_rows),
            filename=output_filename(filename) if filename else "",
        )
        logger.info(f"BOM sourcing complete: {report.stats}")
        return report

    async def source_bom_file(self, filename: Optional[str], text: str) -> BomSourcingReport:
        """Parse, validate and source an uploaded CSV"""
        rows = parse_bom_csv(text)
        if not rows:
            raise BomParseError(EMPTY_BOM_MESSAGE, filename=filename)

        validate_bom_headers(rows[0].keys(), filename=filename)
        logger.info(f"Parsed {len(rows)} BOM rows from {filename or 'upload'}")

        return await self.source_bom(rows, filename=filename or "bom.csv")
