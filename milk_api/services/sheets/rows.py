"""Conversions between worksheet rows and delivery records."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from milk_api.config.config import DELIVERY_FIELDS
from milk_api.services.records import DeliveryRecord

logger = logging.getLogger(__name__)


def column_for_field(header: Sequence[str], field_name: str) -> Optional[int]:
    """Returns the 1-based column holding `field_name`, or None if the header lacks it."""
    for i, name in enumerate(header):
        if str(name).strip() == field_name:
            return i + 1
    return None


def cell_value(value: Any) -> Any:
    """Value to write into a cell; None clears it."""
    return "" if value is None else value


def is_blank_row(row: Sequence[Any]) -> bool:
    return not any(str(cell).strip() for cell in row)


def row_to_record(header: Sequence[str], row: Sequence[Any], row_number: int) -> DeliveryRecord:
    """Builds a record from one sheet row. Short rows read as empty cells.

    Args:
        header: Values of the header row (row 1).
        row: Values of the data row.
        row_number: 1-based sheet row number, kept as the record's ref.
    """
    values = {}
    for name in DELIVERY_FIELDS:
        col = column_for_field(header, name)
        values[name] = row[col - 1] if col is not None and col - 1 < len(row) else ""
    return DeliveryRecord(**values, ref=row_number)


def record_to_row(header: Sequence[str], fields: Dict[str, Any]) -> List[Any]:
    """Lays out `fields` in header order, leaving unknown columns empty."""
    row = []
    for name in header:
        row.append(cell_value(fields.get(str(name).strip())))

    unplaced = [name for name in fields if fields[name] is not None and column_for_field(header, name) is None]
    if unplaced:
        logger.warning(f"Sheet header has no column for {unplaced}. Those values are not written.")
    return row
