from __future__ import annotations

from typing import Any, Optional


def _safe_str_to_bool(value: Any) -> bool:
    """Return ``True`` only for a case-insensitive ``"true"``."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _safe_int(value: Any) -> Optional[int]:
    """Safely convert ``value`` containing commas to ``int``."""
    try:
        cleaned = str(value).strip().replace(",", "")
        return int(cleaned)
    except (TypeError, ValueError):
        return None

__all__ = ["_safe_int", "_safe_str_to_bool"]
