"""CRUD operations on delivery rows, expressed against a DeliveryStore."""

import logging
from typing import Any, Dict, List, Optional

from milk_api.config.config import DELIVERY_FIELDS, UPDATABLE_FIELDS
from milk_api.utils.error_utils import DeliveryNotFoundError

from .records import DeliveryStore
from .resolver import resolve_record

logger = logging.getLogger(__name__)


def list_deliveries(store: DeliveryStore) -> List[Dict[str, Any]]:
    """Returns every delivery projected to the public fields."""
    records = store.list_records()
    logger.info(f"Fetched {len(records)} delivery rows")
    return [record.to_dict() for record in records]


def create_delivery(store: DeliveryStore, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Appends a delivery row with whatever fields were supplied."""
    row = {name: fields.get(name) for name in DELIVERY_FIELDS}
    store.append_record(row)
    logger.info(f"Added delivery row for user '{row['user']}' dated '{row['date']}'")
    return {"success": True, "message": "Row added"}


def update_delivery(store: DeliveryStore, user: Any, target_date: Optional[Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Partially updates the resolved row.

    Args:
        store: Backing store to read and write.
        user: Match key; rows are selected by this user name.
        target_date: Exact date of the row to update, or None for the user's latest row.
        changes: Field values present in the request. Absent fields are left alone.

    Returns:
        The success payload including the row as it now stands.

    Raises:
        DeliveryNotFoundError: If no row matches.
    """
    record = resolve_record(store.list_records(), user, target_date)
    if record is None:
        logger.info(f"No row to update for user '{user}' (targetDate: {target_date!r})")
        raise DeliveryNotFoundError(user, target_date)

    applied = {name: value for name, value in changes.items() if name in UPDATABLE_FIELDS}
    for name, value in applied.items():
        setattr(record, name, "" if value is None else value)

    if applied:
        store.update_record(record, applied)
        logger.info(f"Updated {sorted(applied)} for user '{user}'")
    else:
        logger.info(f"Update for user '{user}' carried no fields to change")

    return {
        "success": True,
        "message": "Row updated successfully",
        "updatedRow": record.to_dict(),
        "status": 200,
    }


def delete_delivery(store: DeliveryStore, user: Any, target_date: Optional[Any]) -> Dict[str, Any]:
    """Deletes the resolved row and returns a snapshot of what was removed."""
    record = resolve_record(store.list_records(), user, target_date)
    if record is None:
        logger.info(f"No row to delete for user '{user}' (targetDate: {target_date!r})")
        raise DeliveryNotFoundError(user, target_date)

    deleted_row = record.to_dict()
    store.delete_record(record)
    logger.info(f"Deleted delivery row for user '{user}' dated '{deleted_row['date']}'")

    return {
        "success": True,
        "message": "Row deleted successfully",
        "deletedRow": deleted_row,
        "status": 200,
    }
