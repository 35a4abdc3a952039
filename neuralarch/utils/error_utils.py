"""
Helpers for turning store and client errors into readable messages
"""

from typing import Any, Optional

from sqlalchemy.exc import DBAPIError

MISSING_TABLE_MARKERS = ("does not exist", "no such table", "undefined table", "undefinedtable")

SETUP_HINT = (
    "Database tables are missing. Run `python setup_database.py` "
    "against the configured DATABASE_URL and retry."
)


def extract_error_message(error: Any) -> str:
    """Best-effort readable message for an arbitrary error value"""
    if error is None:
        return "Unknown error occurred"

    if isinstance(error, str):
        return error

    # DBAPI errors wrap the driver exception; its text is the store's raw message
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)

    if isinstance(error, BaseException):
        return str(error) or error.__class__.__name__

    if isinstance(error, dict):
        for key in ("message", "error", "details", "hint"):
            value = error.get(key)
            if isinstance(value, dict) and value.get("message"):
                return str(value["message"])
            if value:
                return str(value)
        if error.get("code"):
            return f"Error code: {error['code']}"

    text = str(error)
    if len(text) > 200:
        return f"Error: {text[:200]}..."
    return text


def is_missing_table_error(message: str) -> bool:
    lowered = (message or "").lower()
    return any(marker in lowered for marker in MISSING_TABLE_MARKERS)


def setup_hint_for(message: str) -> Optional[str]:
    """Suggest running the schema setup when the store reports a missing relation"""
    if is_missing_table_error(message):
        return SETUP_HINT
    return None
