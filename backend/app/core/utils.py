"""
Utility functions for the application.
"""
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_id() -> str:
    """Generate a new record id (32 lowercase hex characters)."""
    return uuid.uuid4().hex


def is_valid_id(value: Any) -> bool:
    """Check that a value is a syntactically valid record id."""
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))


def format_error(message: str) -> Dict[str, Any]:
    """Format error response."""
    return {"success": False, "message": message}
