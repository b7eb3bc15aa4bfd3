import datetime
import json
from typing import Any, Dict, List, Optional

import pytest

from vaktija.calendar.schemas import PRAYER_DAYS, PrayerDay, SecondaryYearRecord

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MONTHS = ["January", "February", "March", "April", "May", "June", "July",
          "August", "September", "October", "November", "December"]


def _day_payload(day: datetime.date, hijri_day: int = 1, hijri_month: int = 9) -> Dict[str, Any]:
    noon = datetime.datetime(day.year, day.month, day.day, 12, 0)
    return {
        "timings": {
            "Fajr": "04:50 (CET)",
            "Sunrise": "06:35 (CET)",
            "Dhuhr": "12:05 (CET)",
            "Asr": "14:55 (CET)",
            "Sunset": "17:30 (CET)",
            "Maghrib": "17:30 (CET)",
            "Isha": "18:55 (CET)",
            "Imsak": "04:40 (CET)",
            "Midnight": "23:50 (CET)",
            "Firstthird": "21:40 (CET)",
            "Lastthird": "02:00 (CET)",
        },
        "date": {
            "readable": day.strftime("%d %b %Y"),
            "timestamp": str(int(noon.timestamp())),
            "hijri": {
                "date": f"{hijri_day:02d}-{hijri_month:02d}-1447",
                "day": f"{hijri_day:02d}",
                "month": {"number": hijri_month, "en": "Ramaḍān", "ar": "رَمَضان"},
                "year": "1447",
                "weekday": {"en": "Al Khamees", "ar": "الخميس"},
            },
            "gregorian": {
                "date": day.strftime("%d-%m-%Y"),
                "day": day.strftime("%d"),
                "month": {"number": day.month, "en": MONTHS[day.month - 1]},
                "year": str(day.year),
                "weekday": {"en": WEEKDAYS[day.weekday()]},
            },
        },
        "meta": {
            "latitude": 43.8563,
            "longitude": 18.4131,
            "timezone": "Europe/Sarajevo",
            "method": {"id": 13, "name": "Diyanet İşleri Başkanlığı, Turkey"},
            "school": "STANDARD",
        },
    }


@pytest.fixture
def day_payload():
    """Factory: payload dict for one primary-provider day."""
    return _day_payload


@pytest.fixture
def month_payload():
    """Factory: list of day payloads for `count` consecutive days from `start`."""
    def build(start: datetime.date, count: int, hijri_month: int = 9) -> List[Dict[str, Any]]:
        return [
            _day_payload(start + datetime.timedelta(days=i), hijri_day=i + 1, hijri_month=hijri_month)
            for i in range(count)
        ]
    return build


@pytest.fixture
def make_days(month_payload):
    """Factory: validated PrayerDay list for consecutive days."""
    def build(start: datetime.date, count: int, hijri_month: int = 9) -> List[PrayerDay]:
        return PRAYER_DAYS.validate_python(month_payload(start, count, hijri_month))
    return build


@pytest.fixture
def year_payload():
    """Factory: Vaktija.ba yearly payload; vakat derived from month/day so lookups are checkable."""
    def build(year: int = 2026, location_id: int = 77, name: str = "Sarajevo",
              days_per_month: Optional[List[int]] = None) -> Dict[str, Any]:
        days_per_month = days_per_month or [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
        months = []
        for month, count in enumerate(days_per_month, start=1):
            months.append({
                "dan": [
                    {"vakat": [
                        f"4:{month:02d}", f"6:{day:02d}", "12:00", "15:00", f"17:{day:02d}", f"19:{month:02d}",
                    ]}
                    for day in range(1, count + 1)
                ]
            })
        return {"id": location_id, "lokacija": name, "godina": year, "mjesec": months}
    return build


@pytest.fixture
def year_record(year_payload):
    return SecondaryYearRecord.model_validate(year_payload())


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


@pytest.fixture
def fake_response():
    return FakeResponse
