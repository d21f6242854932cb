"""DeliveryStore backed by a Google Sheet worksheet."""

import logging
from typing import Any, Dict, List, Optional
import gspread

from milk_api.config.config import DELIVERY_FIELDS, VALUE_INPUT_OPTION
from milk_api.config.config_loader import AppConfig
from milk_api.services.records import DeliveryRecord, DeliveryStore

# Local imports
from .client import open_worksheet
from .rows import cell_value, column_for_field, is_blank_row, record_to_row, row_to_record

logger = logging.getLogger(__name__)


class GoogleSheetStore(DeliveryStore):
    """Reads and writes delivery rows in one worksheet.

    Row 1 is the header; each record's ref is its 1-based sheet row number.
    The worksheet is opened on first use, so one instance means one
    authentication. Build a new instance per request.
    """

    def __init__(self, config: AppConfig):
        self._config = config
        self._worksheet: Optional[gspread.Worksheet] = None
        self._header: Optional[List[str]] = None

    @property
    def worksheet(self) -> gspread.Worksheet:
        if self._worksheet is None:
            self._worksheet = open_worksheet(self._config)
        return self._worksheet

    def _get_header(self) -> List[str]:
        if self._header is None:
            self._header = self.worksheet.row_values(1)
        return self._header

    def list_records(self) -> List[DeliveryRecord]:
        values = self.worksheet.get_all_values()
        if not values:
            self._header = []
            return []

        self._header = header = values[0]
        records = [
            row_to_record(header, row, row_number)
            for row_number, row in enumerate(values[1:], start=2)
            if not is_blank_row(row)
        ]
        logger.debug(f"Read {len(records)} records from '{self.worksheet.title}'")
        return records

    def append_record(self, fields: Dict[str, Any]) -> None:
        header = self._get_header()
        if not header:
            logger.info(f"Worksheet '{self.worksheet.title}' has no header row. Writing {list(DELIVERY_FIELDS)}.")
            header = list(DELIVERY_FIELDS)
            self.worksheet.append_row(header, value_input_option=VALUE_INPUT_OPTION)
            self._header = header

        self.worksheet.append_row(record_to_row(header, fields), value_input_option=VALUE_INPUT_OPTION)
        logger.debug(f"Appended row to '{self.worksheet.title}'")

    def update_record(self, record: DeliveryRecord, fields: Dict[str, Any]) -> None:
        header = self._get_header()
        updates_for_batch = []
        for name, value in fields.items():
            col = column_for_field(header, name)
            if col is None:
                logger.warning(f"No '{name}' column in sheet header. Skipping.")
                continue
            cell_a1 = gspread.utils.rowcol_to_a1(record.ref, col)
            updates_for_batch.append({
                'range': cell_a1,
                'values': [[cell_value(value)]],
            })
            logger.debug(f"Preparing update for cell {cell_a1} with value: {value}")

        if not updates_for_batch:
            logger.info(f"No writable columns for update of row {record.ref}.")
            return

        self.worksheet.batch_update(updates_for_batch, value_input_option=VALUE_INPUT_OPTION)
        logger.info(f"Updated {len(updates_for_batch)} cell(s) in row {record.ref}.")

    def delete_record(self, record: DeliveryRecord) -> None:
        self.worksheet.delete_rows(record.ref)
        logger.info(f"Deleted row {record.ref} from '{self.worksheet.title}'.")
