"""
Regional timetable provider (api.vaktija.ba) and its yearly cache.
"""
import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from vaktija.core.cache_helper import KeyValueStore
from .errors import FetchFailed, InvalidResponseShape
from .schemas import SecondaryYearRecord

CACHE_PREFIX = "vaktija_cache_"


class VaktijaCache:
    """Yearly records keyed by location id and year. Never raises; no expiry."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def cache_key(location_id: int, year: int) -> str:
        return f"{CACHE_PREFIX}{location_id}_{year}"

    def get(self, location_id: int, year: int) -> Optional[SecondaryYearRecord]:
        key = self.cache_key(location_id, year)
        cached = self.store.get(key)
        if not cached:
            return None
        try:
            return SecondaryYearRecord.model_validate_json(cached)
        except ValidationError as e:
            self.logger.error(f"Error reading from cache {key}: {e}")
            return None

    def put(self, location_id: int, year: int, record: SecondaryYearRecord) -> None:
        key = self.cache_key(location_id, year)
        try:
            self.store.put(key, record.model_dump_json())
        except Exception as e:
            self.logger.warning(f"Failed to cache vaktija data {key}: {e}")

    def clear(self) -> int:
        return self.store.clear(CACHE_PREFIX)


class VaktijaBackend:
    """Yearly prayer tables of the Islamic Community in Bosnia and Herzegovina"""

    DEFAULT_BASE_URL = "https://api.vaktija.ba/vaktija/v1"
    DEFAULT_TIMEOUT = 30
    SOURCE_LABEL = "Takvim IZ u BiH (Vaktija.ba)"
    METHOD_ID = 99

    def __init__(self, config: Dict[str, Any], cache: Optional[VaktijaCache] = None):
        self.config = config
        self.cache = cache
        self.base_url = str(config.get("base_url") or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = config.get("timeout", self.DEFAULT_TIMEOUT)
        self.logger = logging.getLogger(self.__class__.__name__)

    def fetch_year(self, location_id: int, year: int) -> SecondaryYearRecord:
        """Get the yearly table, from cache when present
        Raises:
            FetchFailed: transport error or non-success HTTP status
            InvalidResponseShape: body is not JSON or has no month list
        """
        if self.cache is not None:
            cached = self.cache.get(location_id, year)
            if cached is not None:
                self.logger.info(f"Got vaktija {location_id}/{year} from cache")
                return cached

        url = f"{self.base_url}/{location_id}/{year}"
        self.logger.info(f"Fetching vaktija data from {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchFailed(url, reason=str(e)) from e

        if not response.ok:
            raise FetchFailed(url, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidResponseShape(f"Invalid Vaktija API response: body is not JSON ({e})") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("mjesec"), list):
            raise InvalidResponseShape("Invalid Vaktija API response format: missing month list")

        try:
            record = SecondaryYearRecord.model_validate(payload)
        except ValidationError as e:
            raise InvalidResponseShape(f"Invalid Vaktija API response format: {e.error_count()} issues") from e

        if record.godina is None:
            record = record.model_copy(update={"godina": year})

        if self.cache is not None:
            self.cache.put(location_id, year, record)
        return record
