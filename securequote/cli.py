"""
Command line entry point.

Usage:
  python -m securequote serve [--host HOST] [--port PORT]
  python -m securequote init-db
  python -m securequote health [--url URL]
  python -m securequote list [--url URL] [--search TEXT] [--status STATUS]
  python -m securequote show ID [--url URL]
"""

import argparse
import logging
import sys
from typing import List, Optional

from securequote.client import QuotationClient, QuotationListView
from securequote.client.views import ALL_STATUSES, DetailState
from securequote.errors import QuotationError
from securequote.models import QuotationStatus
from securequote.utils.config import settings
from securequote.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="securequote", description="SecureQuote quotation service")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    commands = parser.add_subparsers(dest="command", required=True)
    
    serve = commands.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=settings.API_HOST)
    serve.add_argument("--port", type=int, default=settings.API_PORT)
    
    commands.add_parser("init-db", help="Create the quotations table")
    
    health = commands.add_parser("health", help="Call the healthcheck endpoint")
    health.add_argument("--url", default=None, help="Server URL")
    
    list_cmd = commands.add_parser("list", help="List public quotations")
    list_cmd.add_argument("--url", default=None, help="Server URL")
    list_cmd.add_argument("--search", default="", help="Substring filter")
    list_cmd.add_argument(
        "--status",
        default=ALL_STATUSES,
        choices=[ALL_STATUSES] + [s.value for s in QuotationStatus],
    )
    
    show = commands.add_parser("show", help="Show the sensitive data of one quotation")
    show.add_argument("id", type=int)
    show.add_argument("--url", default=None, help="Server URL")
    return parser


def _serve(args) -> int:
    import uvicorn
    
    uvicorn.run("securequote.main:app", host=args.host, port=args.port, log_level=(args.log_level or settings.LOG_LEVEL).lower())
    return 0


def _init_db(args) -> int:
    from securequote.utils.schema import init_schema
    
    init_schema()
    print("Quotation schema ready")
    return 0


def _health(args) -> int:
    result = QuotationClient(base_url=args.url).healthcheck()
    print(f"{result.status} at {result.timestamp.isoformat()}")
    return 0


def _list(args) -> int:
    view = QuotationListView(QuotationClient(base_url=args.url))
    view.load()
    view.set_search_term(args.search)
    view.set_status_filter(args.status)
    print(view.render())
    return 1 if view.error else 0


def _show(args) -> int:
    view = QuotationListView(QuotationClient(base_url=args.url))
    detail = view.select(args.id)
    print(detail.render())
    return 0 if detail.state == DetailState.LOADED else 1


COMMANDS = {
    "serve": _serve,
    "init-db": _init_db,
    "health": _health,
    "list": _list,
    "show": _show,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return COMMANDS[args.command](args)
    except QuotationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
