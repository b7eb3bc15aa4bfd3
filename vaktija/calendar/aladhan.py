import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from .errors import ApiError, FetchFailed, InvalidResponseShape
from .schemas import PRAYER_DAYS, ApiEnvelope, PrayerDay


def _first_issue(error: ValidationError) -> str:
    issues = error.errors()
    if not issues:
        return "Unknown schema mismatch"
    location = ".".join(str(part) for part in issues[0].get("loc", ()))
    return f"{location}: {issues[0].get('msg')}" if location else issues[0].get("msg", "")


def parse_api_response(payload: Any, data_adapter: TypeAdapter) -> Any:
    """Validate the {code, status, data} envelope, then data against data_adapter."""
    try:
        envelope = ApiEnvelope.model_validate(payload)
    except ValidationError as e:
        raise InvalidResponseShape(f"Invalid API response: {_first_issue(e)}") from e

    if envelope.code != 200:
        raise ApiError(envelope.code, envelope.status)

    try:
        return data_adapter.validate_python(envelope.data)
    except ValidationError as e:
        raise InvalidResponseShape(f"Invalid API response: {_first_issue(e)}") from e


class PrayerCalendarBackend(ABC):
    """Base class for month-of-days prayer calendar providers"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def fetch_hijri_month(
        self,
        city: str,
        country: str,
        year: int,
        month: int,
        method: Optional[int] = None,
        school: Optional[int] = None,
    ) -> List[PrayerDay]:
        """Get every day of a Hijri month for a city
        Returns:
            Validated day records in provider order
        Raises:
            CalendarError subclasses on transport, envelope or schema failure
        """
        pass


class AladhanBackend(PrayerCalendarBackend):
    """Prayer calendar backend using api.aladhan.com"""

    DEFAULT_BASE_URL = "https://api.aladhan.com/v1"
    DEFAULT_TIMEOUT = 30

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.base_url = str(config.get("base_url") or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = config.get("timeout", self.DEFAULT_TIMEOUT)

    def fetch_hijri_month(
        self,
        city: str,
        country: str,
        year: int,
        month: int,
        method: Optional[int] = None,
        school: Optional[int] = None,
    ) -> List[PrayerDay]:
        url = f"{self.base_url}/hijriCalendarByCity/{year}/{month}"
        return self._fetch_days(url, self._build_params(city, country, method, school))

    def fetch_gregorian_month(
        self,
        city: str,
        country: str,
        year: int,
        month: Optional[int] = None,
        method: Optional[int] = None,
        school: Optional[int] = None,
    ) -> List[PrayerDay]:
        """Days of a Gregorian month, or of the whole year when month is None"""
        path = f"{year}/{month}" if month else str(year)
        url = f"{self.base_url}/calendarByCity/{path}"
        return self._fetch_days(url, self._build_params(city, country, method, school))

    def _build_params(
        self,
        city: str,
        country: str,
        method: Optional[int],
        school: Optional[int],
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"city": city, "country": country}
        if method is not None:
            params["method"] = method
        if school is not None:
            params["school"] = school
        return params

    def _fetch_days(self, url: str, params: Dict[str, Any]) -> List[PrayerDay]:
        self.logger.info(f"Making API request to {url} with params {params}")
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Network error fetching prayer calendar: {e}")
            raise FetchFailed(url, reason=str(e)) from e

        # Aladhan reports failures inside the envelope, so the HTTP status is not checked here
        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidResponseShape(f"Invalid API response: body is not JSON ({e})") from e

        days = parse_api_response(payload, PRAYER_DAYS)
        self.logger.info(f"Received {len(days)} days from {url}")
        return days
