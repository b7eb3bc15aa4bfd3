"""
Calendar API. Mounted at /api/calendar/.
Days are serialized with the provider's field names.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from .errors import CalendarError
from .locations import get_location_id, location_name
from .render import MESSAGES
from .service import find_today

logger = logging.getLogger(__name__)


class MonthResponse(BaseModel):
    city: str
    country: str
    hijri_year: int
    days: List[Dict[str, Any]]


class TodayResponse(BaseModel):
    city: str
    country: str
    day_of_month: int
    day: Dict[str, Any]


class LocationResponse(BaseModel):
    query: str
    id: int
    name: str


def get_router(vaktija_app) -> Optional[APIRouter]:
    """Return router for the calendar; mounted with prefix /api/calendar."""
    router = APIRouter(tags=["Calendar"])

    def _build(city: Optional[str], country: Optional[str]):
        query = vaktija_app.query_for(city, country)
        if not query.city or not query.country:
            raise HTTPException(status_code=404, detail=MESSAGES['city_not_found'])
        try:
            return query, vaktija_app.build_month(query)
        except CalendarError as e:
            logger.error(f"Error building month for {query.city}, {query.country}: {e}")
            raise HTTPException(status_code=502, detail=MESSAGES['fetch_failed'])

    @router.get("/month", response_model=MonthResponse)
    def get_month(
        city: Optional[str] = Query(None),
        country: Optional[str] = Query(None),
    ) -> MonthResponse:
        """Whole assembled window for a location (configured location by default)."""
        query, days = _build(city, country)
        return MonthResponse(
            city=query.city,
            country=query.country,
            hijri_year=vaktija_app.hijri_year,
            days=[day.to_api() for day in days],
        )

    @router.get("/today", response_model=TodayResponse)
    def get_today(
        city: Optional[str] = Query(None),
        country: Optional[str] = Query(None),
    ) -> TodayResponse:
        """Today's entry of the window, or the first day when today is outside it."""
        query, days = _build(city, country)
        index, day = find_today(days)
        return TodayResponse(city=query.city, country=query.country, day_of_month=index + 1, day=day.to_api())

    @router.get("/locations/resolve", response_model=LocationResponse)
    def resolve_location(q: str = Query(...)) -> LocationResponse:
        """Resolve free text to a regional timetable location."""
        location_id = get_location_id(q)
        if location_id is None:
            raise HTTPException(status_code=404, detail=MESSAGES['city_not_found'])
        return LocationResponse(query=q, id=location_id, name=location_name(location_id))

    return router
