"""
JSON serializer utility for converting Python objects to JSON-safe values
"""
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any


def sanitize_for_json(value: Any) -> Any:
    """
    Recursively convert Python objects to JSON-safe values
    (datetime/date -> isoformat, Enum -> value, Decimal -> float).
    Use before saving to JSON columns (audit_logs.meta_json).
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        if isinstance(value, Enum):
            return value.value
        return value
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): sanitize_for_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [sanitize_for_json(item) for item in value]
    return str(value)
