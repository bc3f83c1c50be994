"""CSV and JSON formats for translation import and export.

CSV uses the header ``Key,Culture,TenantId,Value`` with RFC 4180 quoting.
Files written with the older ``TenantId,Culture,Key,Value`` column order are
read by mapping columns from the header. JSON is an array of
``{"key", "culture", "tenantId", "value"}`` objects.

Parsers return raw field mappings; normalization is left to the caller.
"""

import csv
import io
import json
from typing import Any, Dict, Iterable, List, Optional

from infrastructure.localization.exceptions import InvalidImportError
from infrastructure.localization.models import TranslationRecord
from infrastructure.logging import get_module_logger

logger = get_module_logger()

CSV_HEADER = ["Key", "Culture", "TenantId", "Value"]
FIELDS = ("key", "culture", "tenantid", "value")

RawRow = Dict[str, Optional[str]]


def records_to_csv(records: Iterable[TranslationRecord]) -> str:
    """Serialize records to CSV text, header first."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow([record.key, record.culture, record.tenant_id or "", record.value])
    return buffer.getvalue()


def records_to_json(records: Iterable[TranslationRecord]) -> str:
    """Serialize records to a JSON array."""
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)


def _column_map(header: List[str]) -> Dict[str, int]:
    names = [h.strip().lower().replace("_", "") for h in header]
    if all(name in names for name in FIELDS):
        return {name: names.index(name) for name in FIELDS}
    logger.debug("csv_header_not_recognized", header=header)
    return {name: index for index, name in enumerate(FIELDS)}


def parse_csv(text: str) -> List[RawRow]:
    """Parse CSV text into raw rows.

    The first row is always read as the header. Rows with fewer than four
    columns are skipped.

    Args:
        text: CSV document.

    Returns:
        One mapping per data row with keys key, culture, tenantid, value.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    try:
        rows = list(csv.reader(io.StringIO(text, newline="")))
    except csv.Error as e:
        raise InvalidImportError(f"Unreadable CSV payload: {e}") from e

    if not rows:
        return []

    columns = _column_map(rows[0])
    result: List[RawRow] = []
    for line_number, row in enumerate(rows[1:], start=2):
        if len(row) < len(FIELDS):
            if any(cell.strip() for cell in row):
                logger.debug("csv_row_skipped", line=line_number, columns=len(row))
            continue
        result.append({name: row[index] for name, index in columns.items()})
    return result


def _field(item: Dict[str, Any], name: str) -> Optional[str]:
    for k, v in item.items():
        if k.lower().replace("_", "") == name:
            return None if v is None else str(v)
    return None


def parse_json(text: str) -> List[RawRow]:
    """Parse a JSON array of translation objects into raw rows.

    Property names are matched case-insensitively ("tenantId", "TenantId"
    and "tenant_id" are equivalent). Entries that are not objects are skipped.

    Raises:
        InvalidImportError: If the payload is not valid JSON or not an array.
    """
    try:
        payload = json.loads(text) if text and text.strip() else []
    except json.JSONDecodeError as e:
        raise InvalidImportError(f"Invalid JSON payload: {e.msg}") from e

    if not isinstance(payload, list):
        raise InvalidImportError("JSON payload must be an array of translations")

    result: List[RawRow] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            logger.debug("json_item_skipped", index=index, item_type=type(item).__name__)
            continue
        result.append({name: _field(item, name) for name in FIELDS})
    return result
