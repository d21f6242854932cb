"""Configuration settings for the Milk Delivery API."""

import os
import logging
from dotenv import load_dotenv

load_dotenv() # Picks up a local .env file if present

logger = logging.getLogger(__name__)

# --- Google Sheets Configuration ---
# The sheet the deliveries live in. Override with GOOGLE_SHEET_ID.
# (Found in the URL: docs.google.com/spreadsheets/d/SHEET_ID/edit)
DEFAULT_GOOGLE_SHEET_ID = "1rtud3_U8HvvhBYOc6d--IM7Bo4lsYt4wMDVCN5pWzl4"
# Index of the worksheet used when WORKSHEET_NAME is not set (0 = first tab)
DEFAULT_WORKSHEET_INDEX = 0
# Google API Scopes needed
SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive.file'
]

# --- Service Account (individual env vars) ---
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
GOOGLE_AUTH_PROVIDER_CERT_URL = "https://www.googleapis.com/oauth2/v1/certs"

# RAW keeps dates exactly as sent, so targetDate lookups match what was written
VALUE_INPUT_OPTION = 'RAW'

# --- Delivery Sheet Columns ---
# Header names in row 1 of the worksheet, in the order new sheets get them
DELIVERY_FIELDS = ('user', 'address', 'milk', 'partner', 'quantity', 'date')
# Fields a PUT/PATCH may overwrite ('user' is the match key, never rewritten)
UPDATABLE_FIELDS = ('address', 'milk', 'partner', 'quantity', 'date')

# --- HTTP ---
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,PATCH,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
DEFAULT_PORT = 3000


def port_from_env() -> int:
    """Port for the local uvicorn runner; falls back to DEFAULT_PORT on a bad PORT value."""
    raw_port = os.getenv('PORT')
    if not raw_port:
        return DEFAULT_PORT
    try:
        return int(raw_port)
    except ValueError:
        logger.warning(f"Invalid PORT '{raw_port}'. Defaulting to {DEFAULT_PORT}.")
        return DEFAULT_PORT


PORT = port_from_env()
