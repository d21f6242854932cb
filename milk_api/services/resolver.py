"""Picks the single delivery row an update or delete should act on."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

import dateparser

from .records import DeliveryRecord

logger = logging.getLogger(__name__)

_DATEPARSER_SETTINGS = {'STRICT_PARSING': False}


def parse_delivery_date(value: Any) -> Optional[datetime]:
    """Parses a sheet date cell into a naive UTC datetime.

    Returns None for empty or unparseable values.
    """
    if value is None or value == "":
        return None
    parsed_dt = dateparser.parse(str(value), languages=['en'], settings=_DATEPARSER_SETTINGS)
    if parsed_dt is None:
        logger.debug(f"Could not parse delivery date '{value}'")
        return None
    if parsed_dt.tzinfo is not None:
        parsed_dt = parsed_dt.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed_dt


def resolve_record(records: Sequence[DeliveryRecord], user: Any, target_date: Any = None) -> Optional[DeliveryRecord]:
    """Finds the record for `user`, optionally pinned to an exact `target_date`.

    With a target date the first exact (user, date) match wins. Without one,
    the user's most recent record by parsed date is returned; ties keep sheet
    order and unparseable dates rank last.
    """
    if target_date:
        for record in records:
            if record.user == user and record.date == target_date:
                return record
        return None

    user_records = [record for record in records if record.user == user]
    if not user_records:
        return None

    # sorted() is stable with reverse=True, so equal dates stay in sheet order
    ranked = sorted(
        user_records,
        key=lambda record: parse_delivery_date(record.date) or datetime.min,
        reverse=True,
    )
    return ranked[0]
