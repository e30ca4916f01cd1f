"""
Social Proof Studio - Google Maps Review Pages

CLI entry point: fetch a review page for one business, or serve the HTTP API.
"""

import argparse
import json
import logging
import sys
from contextlib import nullcontext

from src.cli.render import render_page
from src.cli.status import StatusTicker
from src.errors import ValidationError
from src.models.reviews_data import ErrorResult
from src.review_service import generate_reviews, to_error_result
from src.utils.links import looks_like_maps_link
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def run_fetch(args) -> int:
    """Fetch and print a review page. Returns the process exit code."""
    logger = logging.getLogger(__name__)

    share_url = (args.url or "").strip()
    if not share_url:
        result = to_error_result(ValidationError("missing shareUrl"))
    elif not looks_like_maps_link(share_url):
        result = to_error_result(ValidationError(
            "The link does not look valid. Make sure it is a Google Maps share link."
        ))
    else:
        if not args.json:
            print("=" * 60, file=sys.stderr)
            print("Social Proof Studio", file=sys.stderr)
            print("=" * 60, file=sys.stderr)
            print(f"Link: {share_url}", file=sys.stderr)
            if args.name:
                print(f"Business: {args.name}", file=sys.stderr)
            print(f"Locale: {settings.TARGET_LOCALE}", file=sys.stderr)
            print("=" * 60, file=sys.stderr)

        with StatusTicker(interval=settings.STATUS_INTERVAL_SECONDS) if not args.quiet else nullcontext():
            result = generate_reviews(share_url, args.name)

    if isinstance(result, ErrorResult):
        logger.error(f"Review fetch failed: {result.kind}")
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False))
        else:
            print(f"\n❌ Oops! Something went wrong: {result.error}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print()
        print(render_page(result))
    return 0


def run_serve(args) -> int:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    print("=" * 60)
    print("Social Proof Studio - Review API")
    print("=" * 60)
    print(f"Listening on http://{args.host}:{args.port}")
    print("=" * 60)

    uvicorn.run(
        "src.web.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower()
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Social Proof Studio - review pages from a Google Maps link",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print a review page
  python main.py fetch --url https://maps.app.goo.gl/abc123 --name "Café Luna"

  # Print the raw JSON payload
  python main.py fetch --url https://maps.app.goo.gl/abc123 --json

  # Serve POST /api/generate-reviews
  python main.py serve --port 8000

Note: Set GOOGLE_API_KEY environment variable before running.
        """
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Fetch and print a review page")
    fetch.add_argument("--url", required=True, help="Google Maps share link")
    fetch.add_argument("--name", help="Business name hint")
    fetch.add_argument("--json", action="store_true", help="Print the JSON payload instead of the page")
    fetch.add_argument("--quiet", action="store_true", help="Do not show status messages")
    fetch.set_defaults(handler=run_fetch)

    serve = subparsers.add_parser("serve", help="Serve the review HTTP API")
    serve.add_argument("--host", default=settings.SERVER_HOST, help=f"Bind host (default: {settings.SERVER_HOST})")
    serve.add_argument("--port", type=int, default=settings.SERVER_PORT, help=f"Bind port (default: {settings.SERVER_PORT})")
    serve.set_defaults(handler=run_serve)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        sys.exit(args.handler(args))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n⚠️  Interrupted", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
