"""
BOM CSV reading and writing.

Input follows standard CSV quoting (quoted commas, doubled quotes). Output
quotes every header and value so spreadsheets round-trip unknown columns
untouched.
"""

import csv
import io
import logging
import re
from typing import List, Iterable, Sequence

from BomSourcer.exceptions import BomParseError
from BomSourcer.services.bom.models import BomRow, REQUIRED_COLUMNS

logger = logging.getLogger(__name__)

_CSV_SUFFIX = re.compile(r"\.csv$", re.IGNORECASE)


def parse_bom_csv(text: str) -> List[BomRow]:
    """Parse CSV text into rows keyed by trimmed header.

    Returns [] when there is no header or no data row.
    """
    if not text:
        return []

    text = text.lstrip("\ufeff")

    # blank lines are skipped; a delimiter-only line such as ",," is still a row
    try:
        records = [
            values for values in csv.reader(io.StringIO(text))
            if len(values) > 1 or any(value.strip() for value in values)
        ]
    except csv.Error as e:
        raise BomParseError(f"Could not parse BOM file: {e}")

    if len(records) < 2:
        return []

    headers = [header.strip() for header in records[0]]
    rows: List[BomRow] = []

    for values in records[1:]:
        row: BomRow = {}
        for index, header in enumerate(headers):
            row[header] = values[index].strip() if index < len(values) else ""
        rows.append(row)

    logger.debug(f"Parsed {len(rows)} BOM rows with columns {headers}")
    return rows


def validate_bom_headers(headers: Iterable[str], filename: str = None) -> None:
    """Raise BomParseError when a required column is missing"""
    present = set(headers)
    missing = [column for column in REQUIRED_COLUMNS if column not in present]
    if missing:
        raise BomParseError(
            f"BOM is missing required column(s): {', '.join(missing)}",
            missing_fields=missing,
            filename=filename,
        )


def rows_to_csv(rows: Sequence[BomRow]) -> str:
    """Serialize rows; header is the union of every row's keys in first-seen order"""
    if not rows:
        return ""

    headers: List[str] = []
    seen = set()
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                headers.append(key)

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([row.get(header) or "" for header in headers])

    # drop the final row terminator
    return buffer.getvalue()[:-1]


def output_filename(original_name: str) -> str:
    """"board.csv" -> "board_sourced.csv" """
    base = _CSV_SUFFIX.sub("", original_name or "bom")
    return f"{base}_sourced.csv"
