"""Handles Google Sheets client authentication and worksheet lookup."""

import logging
import gspread
from google.oauth2 import service_account
from gspread.exceptions import APIError, WorksheetNotFound

# Project imports
from milk_api.config.config import SCOPES
from milk_api.config.config_loader import AppConfig

logger = logging.getLogger(__name__)


def get_gspread_client(config: AppConfig) -> gspread.Client:
    """Authenticates a gspread Client with the configured service account.
    Raises:
        ValueError: If the configuration carries no credentials.
    """
    if not config.service_account_info:
        logger.critical("Service account info not available in config!")
        raise ValueError("Missing service account credentials in configuration")

    creds = service_account.Credentials.from_service_account_info(
        config.service_account_info,
        scopes=SCOPES
    )
    client = gspread.authorize(creds)
    logger.debug("Authorized gspread client.")
    return client


def open_worksheet(config: AppConfig) -> gspread.Worksheet:
    """Opens the deliveries worksheet named by the config.

    Uses WORKSHEET_NAME when set, otherwise the worksheet at worksheet_index.
    Errors are logged and re-raised for the caller to report.
    """
    sheet_id = config.google_sheet_id
    try:
        client = get_gspread_client(config)
        spreadsheet = client.open_by_key(sheet_id)
        if config.worksheet_name:
            worksheet = spreadsheet.worksheet(config.worksheet_name)
        else:
            worksheet = spreadsheet.get_worksheet(config.worksheet_index)
            if worksheet is None:
                raise WorksheetNotFound(f"No worksheet at index {config.worksheet_index}")
        logger.info(f"Opened worksheet '{worksheet.title}' in sheet {sheet_id}")
        return worksheet
    except APIError as e:
        logger.error(f"API Error accessing sheet '{sheet_id}': {e}", exc_info=True)
        if e.response.status_code == 403:
            logger.error("Permission denied. Ensure the service account email has editor access to the sheet.")
        raise
    except WorksheetNotFound:
        logger.error(f"Worksheet '{config.worksheet_name or config.worksheet_index}' not found in Google Sheet ID '{sheet_id}'.")
        raise
