"""
Input Normalization
====================
Tolerant coercions applied before validation: multi-language texts,
timestamps and localized text lookup.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Z"

ISO_DATE_TIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$"
)


def normalize_language_text(src: Any) -> Any:
    """
    Coerce a bare value to ``{"value": ...}``.

    Dicts are passed through untouched so the validator can report
    malformed entries instead of having them silently repaired.
    """
    if isinstance(src, dict):
        return dict(src)
    if isinstance(src, str):
        return {"value": src}
    if src is None:
        return {"value": ""}
    if isinstance(src, bool):
        return {"value": str(src).lower()}
    return {"value": str(src)}


def normalize_multi_language_text(src: Any) -> list[Any] | None:
    """Coerce a string, a single text object or a list into a list of text objects."""
    if src is None:
        return None
    if isinstance(src, list):
        return [normalize_language_text(entry) for entry in src]
    return [normalize_language_text(src)]


def now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def normalize_date_time(value: Any) -> str | None:
    """
    Return an ISO 8601 date-time string, or ``None`` when ``value`` is unusable.

    Date-times without a zone get :data:`DEFAULT_TIMEZONE`; other parseable
    forms (e.g. a plain date) are converted to UTC.
    """
    if not isinstance(value, str) or not value:
        return None
    match = ISO_DATE_TIME_RE.match(value)
    if match:
        if match.group(1):
            return value
        normalized = value + DEFAULT_TIMEZONE
        logger.info("Date-time normalized: '%s' -> '%s'", value, normalized)
        return normalized
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.warning("Invalid date string: '%s'", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    normalized = parsed.isoformat()
    logger.info("Date-time normalized: '%s' -> '%s'", value, normalized)
    return normalized


def get_local_text(texts: list[Any] | None, lang: str = "en-US") -> str:
    """
    Pick the best text for ``lang``: exact tag, then primary subtag, then the first entry.

    Entries may be dicts or objects with ``value``/``lang`` attributes.
    """
    if not texts:
        return ""

    def field(entry: Any, name: str) -> Any:
        return entry.get(name) if isinstance(entry, dict) else getattr(entry, name, None)

    for entry in texts:
        if field(entry, "lang") == lang:
            return field(entry, "value") or ""
    primary = lang.split("-")[0]
    for entry in texts:
        tag = field(entry, "lang")
        if tag and tag.startswith(primary):
            return field(entry, "value") or ""
    return field(texts[0], "value") or ""
