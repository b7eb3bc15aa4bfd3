"""
Pydantic models for provider payloads.

Primary provider (Aladhan) day records are validated field by field with strict
types; anything that does not match raises pydantic.ValidationError, which the
clients turn into InvalidResponseShape. All models are frozen: merging builds
new records with model_copy().
"""
import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, TypeAdapter, field_validator


def time_only(value: str) -> str:
    """'05:02 (CET)' -> '05:02'"""
    return value.split(" ")[0]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrayerTimings(BaseModel):
    # Provider keys are capitalized: Fajr, Sunrise, ..., Firstthird, Lastthird
    model_config = ConfigDict(frozen=True, alias_generator=str.capitalize, populate_by_name=True)

    fajr: StrictStr
    sunrise: StrictStr
    dhuhr: StrictStr
    asr: StrictStr
    sunset: StrictStr
    maghrib: StrictStr
    isha: StrictStr
    imsak: StrictStr
    midnight: StrictStr
    firstthird: StrictStr
    lastthird: StrictStr


class HijriMonth(_Frozen):
    number: StrictInt
    en: StrictStr
    ar: StrictStr


class HijriWeekday(_Frozen):
    en: StrictStr
    ar: StrictStr


class HijriDate(_Frozen):
    date: StrictStr
    day: StrictStr
    month: HijriMonth
    year: StrictStr
    weekday: HijriWeekday


class GregorianMonth(_Frozen):
    number: StrictInt
    en: StrictStr


class GregorianWeekday(_Frozen):
    en: StrictStr


class GregorianDate(_Frozen):
    date: StrictStr  # DD-MM-YYYY
    day: StrictStr
    month: GregorianMonth
    year: StrictStr
    weekday: GregorianWeekday

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        try:
            datetime.datetime.strptime(value, "%d-%m-%Y")
        except ValueError:
            raise ValueError(f"expected a DD-MM-YYYY calendar date, got {value!r}")
        return value

    def to_date(self) -> datetime.date:
        return datetime.datetime.strptime(self.date, "%d-%m-%Y").date()


class DayDate(_Frozen):
    readable: StrictStr
    timestamp: StrictStr
    hijri: HijriDate
    gregorian: GregorianDate


class CalculationMethod(_Frozen):
    id: StrictInt
    name: StrictStr


class School(_Frozen):
    id: StrictInt
    name: StrictStr


class PrayerMeta(_Frozen):
    latitude: StrictFloat
    longitude: StrictFloat
    timezone: StrictStr
    method: CalculationMethod
    school: Union[School, StrictStr]


class PrayerDay(_Frozen):
    """One calendar day from the primary provider."""

    timings: PrayerTimings
    date: DayDate
    meta: PrayerMeta

    def gregorian_date(self) -> datetime.date:
        return self.date.gregorian.to_date()

    def local_date(self) -> datetime.date:
        """Calendar date of the timestamp; seconds or milliseconds since epoch."""
        raw = self.date.timestamp
        seconds = int(raw) / 1000 if len(raw) > 10 else int(raw)
        return datetime.datetime.fromtimestamp(seconds).date()

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


PRAYER_DAYS = TypeAdapter(List[PrayerDay])


class ApiEnvelope(BaseModel):
    code: StrictInt
    status: StrictStr
    data: Any = None


class LocationQuery(_Frozen):
    city: str
    country: str


class VaktijaDay(_Frozen):
    # [Fajr, Sunrise, Dhuhr, Asr, Maghrib, Isha]
    vakat: Optional[List[str]] = None


class VaktijaMonth(_Frozen):
    dan: List[VaktijaDay] = []


class SecondaryYearRecord(_Frozen):
    """Yearly table from the regional provider, months and days 1-based in lookups."""

    id: Optional[int] = None
    lokacija: Optional[str] = None
    godina: Optional[int] = None
    mjesec: List[VaktijaMonth]

    @property
    def year(self) -> Optional[int]:
        return self.godina

    def vakat(self, month: int, day: int) -> Optional[List[str]]:
        """Times for a Gregorian month/day, or None when the table has no such entry."""
        if month < 1 or day < 1 or month > len(self.mjesec):
            return None
        days = self.mjesec[month - 1].dan
        if day > len(days):
            return None
        return days[day - 1].vakat
