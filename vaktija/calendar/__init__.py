from .errors import ApiError, CalendarError, FetchFailed, IncompleteWindow, InvalidResponseShape, LocationNotFound
from .schemas import LocationQuery, PrayerDay, SecondaryYearRecord
from .service import MonthService, find_today

__all__ = [
    "ApiError", "CalendarError", "FetchFailed", "IncompleteWindow", "InvalidResponseShape", "LocationNotFound",
    "LocationQuery", "PrayerDay", "SecondaryYearRecord", "MonthService", "find_today",
]
