"""
Plain-text rendering of an assembled month, with Bosnian labels.
"""
import datetime
from typing import List, Optional, Sequence

from .schemas import LocationQuery, PrayerDay, time_only

TRANSLATIONS = {
    'Monday': 'Pon.', 'Tuesday': 'Uto.', 'Wednesday': 'Sri.',
    'Thursday': 'Čet.', 'Friday': 'Pet.', 'Saturday': 'Sub.', 'Sunday': 'Ned.',
    'February': 'Feb.', 'March': 'Mar.',
}

HEADERS = ("RAM.", "DAN", "DATUM", "ZORA", "SUNCE", "PODNE", "IKINDIJA", "IFTAR", "JACIJA")

MESSAGES = {
    'title': 'RAMAZANSKA VAKTIJA {year}',
    'today': 'Danas u {city}',
    'day_of_month': '{day}. Ramadan {year}',
    'imsak': 'Imsak / Zora',
    'iftar': 'Iftar / Akšam',
    'isha': 'Jacija',
    'footer': 'Ramazan Šerif Mubarek Olsun!',
    'city_not_found': 'Grad nije pronađen.',
    'fetch_failed': 'Greška pri dohvaćanju vaktije.',
}


def translate(value: str) -> str:
    return TRANSLATIONS.get(value, value)


def month_rows(days: Sequence[PrayerDay]) -> List[List[str]]:
    rows = []
    for index, day in enumerate(days):
        gregorian = day.date.gregorian
        timings = day.timings
        rows.append([
            str(index + 1),
            translate(gregorian.weekday.en),
            f"{gregorian.day}. {translate(gregorian.month.en)}",
            time_only(timings.fajr),
            time_only(timings.sunrise),
            time_only(timings.dhuhr),
            time_only(timings.asr),
            time_only(timings.maghrib),
            time_only(timings.isha),
        ])
    return rows


def render_month(
    days: Sequence[PrayerDay],
    query: LocationQuery,
    hijri_year: int,
    today: Optional[datetime.date] = None,
) -> str:
    """Table of the whole window; the row falling on today is marked with '>'"""
    today = today or datetime.date.today()
    rows = month_rows(days)
    widths = [len(header) for header in HEADERS]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def line(cells, marker=" "):
        return marker + " " + "  ".join(cell.rjust(width) for cell, width in zip(cells, widths))

    output = [
        MESSAGES['title'].format(year=hijri_year),
        f"{query.city}, {query.country}",
        "",
        line(HEADERS),
    ]
    for day, row in zip(days, rows):
        output.append(line(row, ">" if day.local_date() == today else " "))
    output.append("")
    output.append(MESSAGES['footer'])
    return "\n".join(output)


def render_today(index: int, day: PrayerDay, query: LocationQuery, hijri_year: int) -> str:
    timings = day.timings
    return "\n".join([
        f"{MESSAGES['today'].format(city=query.city)}  "
        f"[{MESSAGES['day_of_month'].format(day=index + 1, year=hijri_year)}]",
        f"{MESSAGES['imsak']}: {time_only(timings.fajr)}",
        f"{MESSAGES['iftar']}: {time_only(timings.maghrib)}",
        f"{MESSAGES['isha']}: {time_only(timings.isha)}",
    ])
