import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from . import services
from .config import setup_logging
from .errors import SiteGuardError
from .report.html import to_report_html

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="siteguard", description="SiteGuard scan reports")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the web service")
    # HOST and PORT are injected by the hosting platform
    serve.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    serve.add_argument("--port", type=int, default=os.getenv("PORT", "8000"))
    serve.add_argument("--reload", action="store_true")

    scan = sub.add_parser("scan", help="scan a URL and print the normalized report")
    scan.add_argument("url")
    scan.add_argument("--html", action="store_true", help="print the report HTML instead of JSON")
    scan.add_argument("--pdf", type=Path, default=None, metavar="PATH", help="also write the PDF report")
    return parser


async def _scan(args: argparse.Namespace) -> None:
    report = await services.scan_url(args.url)
    if args.html:
        print(to_report_html(report))
    else:
        print(report.model_dump_json(by_alias=True, indent=2))
    if args.pdf:
        args.pdf.write_bytes(await services.render_pdf(report))
        logger.info("PDF written to %s", args.pdf)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # stdout carries the report
    setup_logging(args.log_level, stream=sys.stderr)

    if args.command == "serve":
        import uvicorn
        uvicorn.run("siteguard.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    try:
        asyncio.run(_scan(args))
    except SiteGuardError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
