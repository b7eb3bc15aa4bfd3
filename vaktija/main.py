import argparse
import logging
import sys
from typing import List, Optional

from vaktija.calendar.errors import CalendarError
from vaktija.calendar.render import MESSAGES, render_month, render_today
from vaktija.calendar.service import find_today
from vaktija.core.app import VaktijaApp


def setup_basic_logging():
    """Setup basic logging before config is loaded"""
    root_logger = logging.getLogger()
    if not root_logger.handlers:  # Only add handler if none exists
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        ))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)
        logging.debug("Basic logging initialized")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Ramadan prayer-time month (vaktija)')
    parser.add_argument('--config',
                        help='Path to config file (default: ~/.vaktija/config.yaml)')
    parser.add_argument('--city', help='City name (default: location.city from config)')
    parser.add_argument('--country', help='Country name (default: location.country from config)')
    parser.add_argument('--today', action='store_true', help="Print only today's times")
    parser.add_argument('--serve', action='store_true', help='Run the HTTP API instead of printing')
    parser.add_argument('--clear-cache', action='store_true', help='Remove cached yearly tables and exit')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    setup_basic_logging()
    args = build_parser().parse_args(argv)

    app = VaktijaApp(config_path=args.config, watch=args.serve)
    try:
        if args.clear_cache:
            app.clear_cache()
            return 0

        if args.serve:
            from vaktija.api import run_api_server
            run_api_server(app)
            return 0

        query = app.query_for(args.city, args.country)
        if not query.city or not query.country:
            print(MESSAGES['city_not_found'], file=sys.stderr)
            return 1

        try:
            days = app.build_month(query)
        except CalendarError as e:
            logging.error(f"Error building month: {e}")
            print(MESSAGES['fetch_failed'], file=sys.stderr)
            return 1

        if args.today:
            index, day = find_today(days)
            print(render_today(index, day, query, app.hijri_year))
        else:
            print(render_month(days, query, app.hijri_year))
        return 0
    finally:
        app.shutdown()


if __name__ == "__main__":
    sys.exit(main())
