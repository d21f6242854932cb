import os
import logging
import json
from typing import Optional, Dict, Any
import threading # For singleton lock

from .config import (
    DEFAULT_GOOGLE_SHEET_ID,
    DEFAULT_WORKSHEET_INDEX,
    GOOGLE_AUTH_URI,
    GOOGLE_TOKEN_URI,
    GOOGLE_AUTH_PROVIDER_CERT_URL,
)

logger = logging.getLogger(__name__)

# Singleton instance and lock
_config_instance = None
_config_lock = threading.Lock()


class AppConfig:
    """Holds the application configuration, loaded once as a singleton.

    The instance is handed to the sheet store explicitly, so nothing below
    the HTTP layer reads the environment on its own.
    """
    def __init__(self):
        logger.debug("Initializing AppConfig instance...")

        # --- Sheet Configuration ---
        self.google_sheet_id: str = DEFAULT_GOOGLE_SHEET_ID
        self.worksheet_name: Optional[str] = None
        self.worksheet_index: int = DEFAULT_WORKSHEET_INDEX

        # --- Credentials ---
        self.service_account_info: Optional[Dict[str, Any]] = None

    def _load_sheet_config(self):
        """Loads which spreadsheet and worksheet hold the deliveries."""
        self.google_sheet_id = os.environ.get("GOOGLE_SHEET_ID") or DEFAULT_GOOGLE_SHEET_ID
        self.worksheet_name = os.environ.get("WORKSHEET_NAME") or None

        raw_index = os.environ.get("WORKSHEET_INDEX")
        if raw_index:
            try:
                self.worksheet_index = int(raw_index)
            except ValueError:
                logger.warning(f"Invalid WORKSHEET_INDEX '{raw_index}'. Defaulting to {DEFAULT_WORKSHEET_INDEX}.")
                self.worksheet_index = DEFAULT_WORKSHEET_INDEX

        target = f"worksheet '{self.worksheet_name}'" if self.worksheet_name else f"worksheet #{self.worksheet_index}"
        logger.info(f"Sheet configuration loaded (Sheet: {self.google_sheet_id}, {target})")

    def _service_account_from_parts(self) -> Optional[Dict[str, Any]]:
        """Builds service account info from the individual GOOGLE_* variables."""
        private_key = os.environ.get("GOOGLE_PRIVATE_KEY")
        client_email = os.environ.get("GOOGLE_CLIENT_EMAIL")
        if not private_key or not client_email:
            return None

        return {
            "type": "service_account",
            "project_id": os.environ.get("GOOGLE_PROJECT_ID"),
            "private_key_id": os.environ.get("GOOGLE_PRIVATE_KEY_ID"),
            # Keys pasted into env files usually carry literal "\n" sequences
            "private_key": private_key.replace("\\n", "\n"),
            "client_email": client_email,
            "client_id": os.environ.get("GOOGLE_CLIENT_ID"),
            "auth_uri": GOOGLE_AUTH_URI,
            "token_uri": GOOGLE_TOKEN_URI,
            "auth_provider_x509_cert_url": GOOGLE_AUTH_PROVIDER_CERT_URL,
            "client_x509_cert_url": os.environ.get("GOOGLE_CLIENT_CERT_URL"),
        }

    def _load_service_account(self):
        """Loads service account credentials.

        Priority: GOOGLE_APPLICATION_CREDENTIALS file path, then the
        SERVICE_ACCOUNT_JSON env var, then the individual GOOGLE_* variables.
        """
        gac_path = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
        sa_json_env = os.environ.get("SERVICE_ACCOUNT_JSON")

        if gac_path:
            logger.info(f"GOOGLE_APPLICATION_CREDENTIALS path found: {gac_path}")
            try:
                with open(gac_path, 'r') as f:
                    self.service_account_info = json.load(f)
                logger.info(f"Successfully loaded service account JSON from file: {gac_path}")
            except FileNotFoundError:
                logger.error(f"Service account file specified by GOOGLE_APPLICATION_CREDENTIALS not found: {gac_path}")
                raise ValueError(f"Service account file not found: {gac_path}")
            except json.JSONDecodeError as e:
                logger.error(f"Invalid JSON in service account file {gac_path}: {e}")
                raise ValueError(f"Invalid service account JSON in file: {gac_path}") from e
        elif sa_json_env:
            logger.info("Using SERVICE_ACCOUNT_JSON environment variable for service account key.")
            try:
                self.service_account_info = json.loads(sa_json_env)
            except json.JSONDecodeError as e:
                log_snippet = sa_json_env[:50] + "..." if len(sa_json_env) > 50 else sa_json_env
                logger.critical(f"Failed to parse SERVICE_ACCOUNT_JSON: {e}. Snippet: {log_snippet}")
                raise ValueError("Invalid service account JSON in SERVICE_ACCOUNT_JSON") from e
        else:
            self.service_account_info = self._service_account_from_parts()
            if self.service_account_info:
                logger.info("Using individual GOOGLE_* environment variables for service account key.")

        if not self.service_account_info:
            logger.error("Service Account credentials not found. Set GOOGLE_APPLICATION_CREDENTIALS (path), SERVICE_ACCOUNT_JSON (content), or GOOGLE_PRIVATE_KEY and GOOGLE_CLIENT_EMAIL.")
            raise ValueError("Service Account credentials are required")

        logger.info(f"Service account loaded for {self.service_account_info.get('client_email', '(unknown email)')}")

    def load(self):
        """Load all configuration (sheet target and credentials)."""
        logger.info("Loading application configuration...")
        self._load_sheet_config()
        self._load_service_account()
        logger.info("Configuration loading complete.")


def get_config() -> AppConfig:
    """Gets the singleton AppConfig instance, loading it on first call."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            # Double-check locking
            if _config_instance is None:
                logger.info("Creating and loading singleton AppConfig instance.")
                temp_instance = AppConfig()
                try:
                    temp_instance.load()
                    _config_instance = temp_instance
                except Exception as e:
                    logger.critical(f"Failed to load configuration during singleton creation: {e}", exc_info=True)
                    # Prevent partially configured singleton from being assigned
                    raise
    return _config_instance


def reset_config():
    """Drops the cached AppConfig so the next get_config() reloads from the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None
