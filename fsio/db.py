import json
import logging
from pathlib import Path
from typing import Dict

from google.cloud import firestore
from google.oauth2 import service_account

from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)

DEFAULT_DATABASE = "(default)"
CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"


def load_service_account(path: str) -> Dict:
    if not path:
        raise ConfigurationError(
            f"--serviceAccount=<path> is required (or set {CREDENTIALS_ENV})."
        )
    key_path = Path(path).expanduser()
    if not key_path.is_file():
        raise ConfigurationError(f"Service account file not found: {path}")
    try:
        with key_path.open(encoding="utf-8") as f:
            key_dict = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read service account file {path}: {e}") from e
    if not isinstance(key_dict, dict) or not key_dict.get("project_id"):
        raise ConfigurationError(
            f"Service account file {path} is missing 'project_id'")
    return key_dict


def init_client(service_account_path: str, database_id: str = DEFAULT_DATABASE):
    """Build a Firestore client for the given service account and database.

    A fresh client is returned on every call; pass it explicitly to the
    exporter and importer.
    """
    key_dict = load_service_account(service_account_path)
    try:
        credentials = service_account.Credentials.from_service_account_info(
            key_dict)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid service account file {service_account_path}: {e}") from e
    database_id = database_id or DEFAULT_DATABASE
    LOGGER.debug("Connecting to project %s, database %s",
                 key_dict["project_id"], database_id)
    return firestore.Client(
        project=key_dict["project_id"],
        credentials=credentials,
        database=database_id
    )
