# app/services/import_helpers.py
#
# Input Helper Functions
# Lenient parsing of raw form / CSV values into floats, dates and platform lists.

import math
from datetime import datetime, date
from typing import Any, Iterable, List, Optional

from models import PLATFORMS


# ---- Numbers ----

def parse_optional_float(value: Any) -> Optional[float]:
    """
    '12.50', '$1,012.50', 12.5 -> float.
    None, '', infinities and anything unparseable -> None.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        f = float(value)
        return f if math.isfinite(f) else None

    v = str(value).strip()
    if v == "":
        return None
    v = v.replace("$", "").replace(",", "")
    try:
        f = float(v)
    except ValueError:
        return None
    return f if math.isfinite(f) else None


def float_or_zero(value: Any) -> float:
    f = parse_optional_float(value)
    return 0.0 if f is None else f


# ---- Dates ----

def parse_optional_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    s = str(value).strip()
    if not s:
        return None
    try:
        return datetime.strptime(s[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def iso_or_empty(d: Optional[date]) -> str:
    return d.isoformat() if d else ""


# ---- Platforms ----

def normalize_platform(value: Any) -> Optional[str]:
    """
    Case-insensitive match against the known platforms
    ('ebay' -> 'eBay'). Unknown values -> None.
    """
    s = str(value or "").strip().lower()
    for p in PLATFORMS:
        if p.lower() == s:
            return p
    return None


def parse_platform_list(values: Iterable[Any]) -> List[str]:
    """
    Accepts repeated form values and/or '; ' or ',' separated strings.
    Unknown names are dropped, duplicates collapsed, order follows PLATFORMS.
    """
    found = set()
    for value in values or []:
        if value is None:
            continue
        for part in str(value).replace(";", ",").split(","):
            p = normalize_platform(part)
            if p:
                found.add(p)
    return [p for p in PLATFORMS if p in found]
