"""Module for interacting with Google Sheets.

Provides:
- Service account authentication and worksheet lookup.
- Row/record conversion against the sheet's header row.
- GoogleSheetStore, the production DeliveryStore.
"""

# Public API for the sheets service

from .client import get_gspread_client, open_worksheet
from .store import GoogleSheetStore

__all__ = [
    'get_gspread_client',
    'open_worksheet',
    'GoogleSheetStore',
]
