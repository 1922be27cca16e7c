"""
Calendar month names and month-sequence arithmetic.

A month-sequence index encodes (year, month) as ``year * 12 + offset`` where
offset is 0 for January, so consecutive months are consecutive integers.
"""
from datetime import date
from typing import Iterator, Optional, Tuple

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

_BY_LOWER = {name.lower(): name for name in MONTHS}


def normalize_month(value: Optional[str]) -> Optional[str]:
    """Return the canonical month name for ``value`` (case-insensitive), else None."""
    if not isinstance(value, str):
        return None
    return _BY_LOWER.get(value.strip().lower())


def month_index(month: str) -> int:
    return MONTHS.index(month)


def month_seq(month: str, year: int) -> int:
    return year * 12 + month_index(month)


def month_name(seq: int) -> str:
    return MONTHS[seq % 12]


def from_seq(seq: int) -> Tuple[str, int]:
    """Split a month-sequence index back into (month name, year)."""
    return month_name(seq), seq // 12


def date_seq(day: Optional[date]) -> Optional[int]:
    """Sequence index of the month containing ``day``; None when there is no date."""
    if day is None:
        return None
    return day.year * 12 + (day.month - 1)


def months_between(start_seq: int, end_seq: int) -> Iterator[Tuple[str, int]]:
    """Yield (month, year) for start_seq <= seq < end_seq in chronological order."""
    for seq in range(start_seq, end_seq):
        yield from_seq(seq)
