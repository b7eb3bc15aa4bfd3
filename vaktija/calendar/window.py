"""
Splice two provider months into one fixed-length window of days.

The primary provider's Hijri month for the reference epoch (Ramadan 1447)
starts one day early: its first entry is Feb 18, 2026 while Ramadan 1 is
Feb 19. WindowPolicy carries that correction as configuration instead of a
hardcoded slice, and can instead anchor the window on an explicit start date.
"""
import datetime
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import IncompleteWindow
from .schemas import PrayerDay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowPolicy:
    offset: int = 1  # leading entries of the first month to drop
    length: int = 30
    start_date: Optional[datetime.date] = None  # overrides offset when set

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError("offset must be >= 0")
        if self.length < 1:
            raise ValueError("length must be >= 1")

    @classmethod
    def from_config(cls, calendar_config: Dict[str, Any]) -> "WindowPolicy":
        start = calendar_config.get("window_start")
        if isinstance(start, str):
            start = datetime.date.fromisoformat(start)
        return cls(
            offset=int(calendar_config.get("window_offset", 1)),
            length=int(calendar_config.get("window_length", 30)),
            start_date=start,
        )


def next_hijri_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the lunar month after the given one."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def _ascending(days: Sequence[PrayerDay]) -> List[PrayerDay]:
    """Drop entries that do not move strictly forward in Gregorian date."""
    result: List[PrayerDay] = []
    last = None
    for day in days:
        current = day.gregorian_date()
        if last is not None and current <= last:
            logger.debug(f"Skipping out-of-order or duplicate day {day.date.gregorian.date}")
            continue
        result.append(day)
        last = current
    return result


def assemble_window(
    month_a: Sequence[PrayerDay],
    month_b: Sequence[PrayerDay],
    policy: WindowPolicy = WindowPolicy(),
) -> List[PrayerDay]:
    """Return exactly policy.length days, ascending, starting inside month_a.

    With the default policy the first entry of month_a is dropped and the
    window continues into month_b (for a 30-day month_a that appends month_b's
    first day).
    """
    days = _ascending(list(month_a) + list(month_b))

    if policy.start_date is not None:
        start = next(
            (index for index, day in enumerate(days) if day.gregorian_date() >= policy.start_date),
            len(days),
        )
    else:
        start = min(policy.offset, len(days))

    window = days[start:start + policy.length]
    if len(window) < policy.length:
        raise IncompleteWindow(len(window), policy.length)
    return window
