"""
Overlay regional (Vaktija.ba) times onto primary provider days.

Every failure falls back to the primary days unchanged; nothing is raised.
"""
import logging
from typing import List, Sequence

from .locations import get_location_id
from .schemas import CalculationMethod, LocationQuery, PrayerDay, SecondaryYearRecord
from .vaktija_backend import VaktijaBackend

logger = logging.getLogger(__name__)

VAKAT_COUNT = 6

REGIONAL_METHOD = CalculationMethod(id=VaktijaBackend.METHOD_ID, name=VaktijaBackend.SOURCE_LABEL)


def overlay_day(day: PrayerDay, vakat: Sequence[str]) -> PrayerDay:
    """New day with timings from [Fajr, Sunrise, Dhuhr, Asr, Maghrib, Isha]."""
    timings = day.timings.model_copy(update={
        "fajr": vakat[0],
        "sunrise": vakat[1],
        "dhuhr": vakat[2],
        "asr": vakat[3],
        "maghrib": vakat[4],
        "isha": vakat[5],
        "sunset": vakat[4],  # Maghrib starts at sunset
        "imsak": vakat[0],
    })
    meta = day.meta.model_copy(update={"method": REGIONAL_METHOD})
    return day.model_copy(update={"timings": timings, "meta": meta})


def _merge_day(day: PrayerDay, record: SecondaryYearRecord, year: int) -> PrayerDay:
    gregorian = day.gregorian_date()
    # Days in another year would need a second yearly fetch; they keep primary times
    if gregorian.year != year:
        return day

    vakat = record.vakat(gregorian.month, gregorian.day)
    if vakat is None or len(vakat) < VAKAT_COUNT:
        return day
    return overlay_day(day, vakat)


def merge_secondary(
    primary_days: Sequence[PrayerDay],
    query: LocationQuery,
    backend: VaktijaBackend,
) -> List[PrayerDay]:
    """Same days, same order, with regional times wherever the table has them."""
    days = list(primary_days)
    if not days:
        return days

    location_id = get_location_id(query.city)
    if location_id is None:
        logger.warning(f"Vaktija ID not found for city: {query.city}. Using primary provider times.")
        return days

    year = days[0].gregorian_date().year
    try:
        record = backend.fetch_year(location_id, year)
    except Exception as e:
        logger.error(f"Failed to fetch Vaktija data: {e}")
        return days

    record_year = record.year if record.year is not None else year
    merged = [_merge_day(day, record, record_year) for day in days]
    replaced = sum(1 for before, after in zip(days, merged) if before is not after)
    logger.info(f"Merged Vaktija times for {replaced}/{len(days)} days (location {location_id})")
    return merged
