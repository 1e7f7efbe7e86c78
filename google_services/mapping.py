"""Helpers for reshaping Google API responses into output records."""

from typing import Any, Dict, Optional


def compact(record: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None so optional fields are omitted."""
    return {key: value for key, value in record.items() if value is not None}


def to_int(value: Any) -> Optional[int]:
    """Convert a numeric string statistic ("1234") to int; None if absent."""
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def thumbnail_url(snippet: Dict[str, Any], size: str) -> Optional[str]:
    """URL of the named thumbnail size ('default', 'medium', 'high')."""
    return (snippet.get("thumbnails") or {}).get(size, {}).get("url")
