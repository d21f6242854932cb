"""Delivery records and the storage capability the dispatcher works against."""

import logging
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from milk_api.config.config import DELIVERY_FIELDS

logger = logging.getLogger(__name__)


@dataclass
class DeliveryRecord:
    """One delivery row. `ref` is whatever the owning store needs to find it again."""
    user: Any = ""
    address: Any = ""
    milk: Any = ""
    partner: Any = ""
    quantity: Any = ""
    date: Any = ""
    ref: Any = field(default=None, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Projects the record onto the public delivery fields."""
        return {name: getattr(self, name) for name in DELIVERY_FIELDS}


class DeliveryStore(ABC):
    """Narrow interface over the backing store (a Google Sheet in production)."""

    @abstractmethod
    def list_records(self) -> List[DeliveryRecord]:
        """Returns every record currently in the store, in store order."""

    @abstractmethod
    def append_record(self, fields: Dict[str, Any]) -> None:
        """Adds a new record; fields not given are left empty."""

    @abstractmethod
    def update_record(self, record: DeliveryRecord, fields: Dict[str, Any]) -> None:
        """Overwrites only the given fields of an existing record."""

    @abstractmethod
    def delete_record(self, record: DeliveryRecord) -> None:
        """Removes an existing record."""


class InMemoryDeliveryStore(DeliveryStore):
    """List-backed store. Cells hold values as given, with None stored as ''."""

    def __init__(self, rows: List[Dict[str, Any]] = None):
        self._ids = itertools.count(1)
        self._rows: List[Dict[str, Any]] = []
        for row in rows or []:
            self.append_record(row)

    @staticmethod
    def _cell(value: Any) -> Any:
        return "" if value is None else value

    def list_records(self) -> List[DeliveryRecord]:
        return [
            DeliveryRecord(**{name: row.get(name, "") for name in DELIVERY_FIELDS}, ref=row["_id"])
            for row in self._rows
        ]

    def append_record(self, fields: Dict[str, Any]) -> None:
        row = {name: self._cell(fields.get(name)) for name in DELIVERY_FIELDS}
        row["_id"] = next(self._ids)
        self._rows.append(row)
        logger.debug(f"Appended in-memory row {row['_id']}")

    def _find(self, record: DeliveryRecord) -> Dict[str, Any]:
        for row in self._rows:
            if row["_id"] == record.ref:
                return row
        raise KeyError(f"Record {record.ref!r} is no longer in the store")

    def update_record(self, record: DeliveryRecord, fields: Dict[str, Any]) -> None:
        row = self._find(record)
        for name, value in fields.items():
            if name in DELIVERY_FIELDS:
                row[name] = self._cell(value)

    def delete_record(self, record: DeliveryRecord) -> None:
        self._rows.remove(self._find(record))
