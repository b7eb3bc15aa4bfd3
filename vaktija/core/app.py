from typing import Dict, Any, List, Optional
import logging
import sys

from .cache_helper import create_store
from .config import Config
from vaktija.calendar.schemas import LocationQuery, PrayerDay
from vaktija.calendar.service import MonthService
from vaktija.calendar.vaktija_backend import VaktijaBackend, VaktijaCache


class VaktijaApp:
    """Wires config, cache and calendar service together."""

    def __init__(self, config_path: Optional[str] = None, config: Optional[Config] = None, watch: bool = False):
        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = config or Config(config_path=config_path, watch=watch)
        self.config.register_change_callback(self.handle_config_change)

        self._setup_logging()
        self._build_service()

    def _setup_logging(self) -> None:
        """Configure root logging level and optional file output from config"""
        logging_config = self.config.get_section("logging")
        root_logger = logging.getLogger()
        level = str(logging_config.get("level", "INFO")).upper()
        root_logger.setLevel(getattr(logging, level, logging.INFO))

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        )

        if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
                   for h in root_logger.handlers):
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        log_file = logging_config.get("file")
        if log_file and not any(isinstance(h, logging.FileHandler) for h in root_logger.handlers):
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        logging.info("Vaktija application starting...")

    def _build_service(self) -> None:
        self.cache = VaktijaCache(create_store(self.config.data))
        secondary = VaktijaBackend(self.config.get_section("secondary"), cache=self.cache)
        self.service = MonthService(self.config.data, secondary=secondary)

    def handle_config_change(self, new_config: Dict[str, Any]) -> None:
        """Rebuild backends so new URLs, methods and window settings take effect"""
        try:
            self._build_service()
            self.logger.info("Calendar service rebuilt after config change")
        except Exception as e:
            self.logger.error(f"Error applying config change: {e}")
            self.logger.exception(e)

    @property
    def hijri_year(self) -> int:
        return self.service.hijri_year

    def query_for(self, city: Optional[str] = None, country: Optional[str] = None) -> LocationQuery:
        """Query from explicit values, falling back to the configured location"""
        default = self.service.default_query()
        return LocationQuery(city=city or default.city, country=country or default.country)

    def build_month(self, query: Optional[LocationQuery] = None) -> List[PrayerDay]:
        return self.service.build_month(query)

    def clear_cache(self) -> int:
        removed = self.cache.clear()
        self.logger.info(f"Removed {removed} cached vaktija entries")
        return removed

    def shutdown(self) -> None:
        self.config.cleanup()
