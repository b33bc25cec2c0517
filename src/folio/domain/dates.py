"""Date parsing and ordering for frontmatter ``date`` fields.

Frontmatter dates are written by hand, so several shapes are accepted:

- ``2024`` (year only)
- ``2024-06`` (year and month)
- ``2024-06-01`` (full date)
- ISO-8601 datetimes, including a trailing ``Z``
- ``date`` / ``datetime`` objects built in code (the YAML loader keeps
  timestamps as text)

Anything else is unparseable. Unparseable dates never raise: callers
get ``None`` and the sort key puts them after every valid date.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

_YEAR_RE = re.compile(r"^\d{4}$")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
_FULL_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def parse_date(value: Any) -> datetime | None:
    """Parse a frontmatter date value into a naive ``datetime``.

    Returns ``None`` for missing or unparseable values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if _YEAR_RE.match(text):
        return datetime(int(text), 1, 1)

    match = _YEAR_MONTH_RE.match(text)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            return None
        return datetime(year, month, 1)

    match = _FULL_DATE_RE.match(text)
    if match:
        try:
            return datetime(*(int(part) for part in match.groups()))
        except ValueError:
            return None

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        return None


def is_valid_date(value: Any) -> bool:
    """Check whether *value* is a parseable frontmatter date."""
    return parse_date(value) is not None


def normalize_date(value: Any) -> Any:
    """Render ``date`` / ``datetime`` objects as ISO text.

    Strings and other values pass through untouched so that the original
    spelling (``"2024"``, ``"2024-06"``) survives into the parsed record.
    """
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def date_sort_key(value: Any) -> tuple[int, float]:
    """Sort key ordering newest first, unparseable dates last.

    Use with ``sorted(..., key=...)`` in ascending order.
    """
    parsed = parse_date(value)
    if parsed is None:
        return (1, 0.0)
    return (0, -_ordinal_seconds(parsed))


def _ordinal_seconds(moment: datetime) -> float:
    # Timezone independent and defined for pre-epoch years.
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    seconds_in_day = (moment - midnight).total_seconds()
    return moment.toordinal() * 86400.0 + seconds_in_day
