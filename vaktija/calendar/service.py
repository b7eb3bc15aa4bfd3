"""
Service layer: build the displayed month for a location.

Both Hijri months are requested at the same time and joined before the window
is assembled; the regional overlay runs afterwards because it needs the
Gregorian year of the assembled days.
"""
import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .aladhan import AladhanBackend, PrayerCalendarBackend
from .merge import merge_secondary
from .schemas import LocationQuery, PrayerDay
from .vaktija_backend import VaktijaBackend
from .window import WindowPolicy, assemble_window, next_hijri_month


def find_today(days: Sequence[PrayerDay], today: Optional[datetime.date] = None) -> Tuple[int, PrayerDay]:
    """(index, day) of the entry falling on today, else (0, first day)."""
    if not days:
        raise ValueError("no days to search")
    today = today or datetime.date.today()
    for index, day in enumerate(days):
        if day.local_date() == today:
            return index, day
    return 0, days[0]


class MonthService:
    """Fetch, splice and overlay one month of prayer days"""

    def __init__(
        self,
        config_data: Dict[str, Any],
        primary: Optional[PrayerCalendarBackend] = None,
        secondary: Optional[VaktijaBackend] = None,
    ):
        self.config_data = config_data
        self.logger = logging.getLogger(self.__class__.__name__)
        calendar_config = config_data.get("calendar") or {}
        primary_config = config_data.get("primary") or {}
        secondary_config = config_data.get("secondary") or {}

        self.hijri_year = int(calendar_config.get("hijri_year", 1447))
        self.hijri_month = int(calendar_config.get("hijri_month", 9))
        self.policy = WindowPolicy.from_config(calendar_config)
        self.method = primary_config.get("method")
        self.school = primary_config.get("school")
        self.secondary_enabled = bool(secondary_config.get("enabled", True))

        self.primary = primary or AladhanBackend(primary_config)
        self.secondary = secondary or VaktijaBackend(secondary_config)

    def default_query(self) -> LocationQuery:
        location = self.config_data.get("location") or {}
        return LocationQuery(city=location.get("city", ""), country=location.get("country", ""))

    def fetch_months(self, query: LocationQuery) -> Tuple[List[PrayerDay], List[PrayerDay]]:
        """Fetch the configured Hijri month and the next one concurrently"""
        next_year, next_month = next_hijri_month(self.hijri_year, self.hijri_month)
        self.logger.info(
            f"Fetching {self.hijri_month}/{self.hijri_year} and {next_month}/{next_year} "
            f"for {query.city}, {query.country}"
        )
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="aladhan") as pool:
            first = pool.submit(
                self.primary.fetch_hijri_month,
                query.city, query.country, self.hijri_year, self.hijri_month,
                method=self.method, school=self.school,
            )
            second = pool.submit(
                self.primary.fetch_hijri_month,
                query.city, query.country, next_year, next_month,
                method=self.method, school=self.school,
            )
            # result() re-raises the first failure after both were issued
            return first.result(), second.result()

    def build_month(self, query: Optional[LocationQuery] = None) -> List[PrayerDay]:
        query = query or self.default_query()
        month_a, month_b = self.fetch_months(query)
        days = assemble_window(month_a, month_b, self.policy)
        if self.secondary_enabled:
            days = merge_secondary(days, query, self.secondary)
        return days
