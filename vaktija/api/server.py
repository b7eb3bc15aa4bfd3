"""
FastAPI server for the vaktija API. run_api_server(app) blocks until the server stops.
Calendar routes come from vaktija.calendar.api (get_router(vaktija_app)) under /api/calendar/.
Docs: http://<host>:<port>/docs
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI

from vaktija.calendar.api import get_router as get_calendar_router

logger = logging.getLogger(__name__)


def create_app(vaktija_app: Any) -> FastAPI:
    """Create FastAPI app with routes that use the given VaktijaApp instance."""
    app = FastAPI(title="Vaktija API", description="Ramadan prayer-time month per location")

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Configured location and calendar window."""
        calendar_config = vaktija_app.config.get_section("calendar")
        return {
            "status": "ok",
            "location": vaktija_app.config.get_section("location"),
            "hijri_year": calendar_config.get("hijri_year"),
            "hijri_month": calendar_config.get("hijri_month"),
            "secondary_enabled": vaktija_app.config.get_section("secondary").get("enabled", True),
        }

    router = get_calendar_router(vaktija_app)
    if router is not None:
        app.include_router(router, prefix="/api/calendar")

    return app


def run_api_server(vaktija_app: Any) -> None:
    """
    Serve the API with uvicorn. Reads api.host (default 127.0.0.1) and api.port (default 8765).
    """
    api_config = vaktija_app.config.get_section("api")
    host = api_config.get("host", "127.0.0.1")
    port = int(api_config.get("port", 8765))
    fastapi_app = create_app(vaktija_app)

    import uvicorn
    logger.info(f"API server listening at http://{host}:{port} (docs at /docs)")
    uvicorn.run(fastapi_app, host=host, port=port)
