"""
JSON utilities for MongoDB documents.

Converts BSON-only values (ObjectId, datetime) into JSON-safe values and
parses identifiers coming from request parameters.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from src.common.error_handling import InvalidIdentifierError

# Fields never returned by list endpoints
SENSITIVE_FIELDS = frozenset({"password", "refreshToken", "refreshTokens", "passwordResetToken"})


def serialize_value(value: Any) -> Any:
    """Recursively convert ObjectId/datetime values for JSON."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return serialize_document(value)
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Serialize a MongoDB document for a JSON response.

    Handles ObjectId conversion and date formatting, including nested
    documents and arrays. Sensitive fields are dropped.

    Example:
        >>> serialize_document({"_id": ObjectId("65a0c0ffee0000000000beef"), "title": "Engineer"})
        {'_id': '65a0c0ffee0000000000beef', 'title': 'Engineer'}
    """
    return {
        key: serialize_value(value)
        for key, value in document.items()
        if key not in SENSITIVE_FIELDS
    }


def to_object_id(value: Any, field_name: str = "id") -> ObjectId:
    """
    Parse an identifier into an ObjectId.

    Raises:
        InvalidIdentifierError: If the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise InvalidIdentifierError(field_name, value)


def optional_object_id(value: Optional[str], field_name: str = "id") -> Optional[ObjectId]:
    """Like to_object_id but passes None/empty strings through as None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_object_id(value.strip() if isinstance(value, str) else value, field_name)


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated query parameter, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
