#!/usr/bin/env python3
"""
CLI entrypoint for the defense intelligence dashboard.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from config import IntelConfig
from credentials import ApiKeyStatus, FileCredentialStore, configure_api_key, default_provider
from file_utils import DashboardFileManager, write_json
from gemini_client import check_api_key
from intelligence_engine import IntelligenceEngine
from logging_utils import get_error_info, log_exception, setup_run_logging
from markdown_utils import format_markdown, fragments_to_text
from renderers import available_renderers


def enable_debug_logging() -> None:
    logging.getLogger().setLevel(logging.DEBUG)
    for logger_name in logging.Logger.manager.loggerDict:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search a defense technology topic and render a dashboard.")
    parser.add_argument("query", type=str, nargs="?", default="", help="Search topic.")
    parser.add_argument(
        "--filter",
        choices=IntelConfig.filter_keys(),
        default="all",
        help="Source filter applied to result cards.",
    )
    parser.add_argument("--output-dir", type=str, default=IntelConfig.OUTPUT_DIR, help="Base output directory.")
    parser.add_argument(
        "--renderers",
        type=str,
        default=",".join(IntelConfig.DASHBOARD_RENDERERS),
        help=f"Comma separated renderers ({', '.join(available_renderers())}).",
    )
    parser.add_argument("--suggest", action="store_true", help="Print search suggestions for the query and exit.")
    parser.add_argument("--configure-key", type=str, metavar="KEY", help="Test and store a Gemini API key.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def _print_block(text: str) -> None:
    for line in format_markdown(text):
        print(f"  {fragments_to_text(line)}" if not line.is_blank else "")


def main(argv=None) -> int:
    args = parse_args(argv)
    load_dotenv()

    if args.configure_key is not None:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        status = configure_api_key(FileCredentialStore(), args.configure_key, check_api_key)
        print(f"Gemini API key status: {status.value}")
        return 0 if status == ApiKeyStatus.VALID else 1

    engine = IntelligenceEngine(default_provider())

    if args.suggest:
        logging.basicConfig(level=logging.WARNING, format="%(message)s")
        for suggestion in engine.suggest(args.query):
            print(suggestion)
        return 0

    if not args.query.strip():
        print("❌ A search query is required.")
        return 2

    file_manager = DashboardFileManager(args.output_dir)
    output_dir = file_manager.create_dashboard_directory(args.query)
    run_logger, _ = setup_run_logging(output_dir, args.query)
    if args.debug:
        enable_debug_logging()
        run_logger.debug("Debug logging enabled.")

    print(f"🛰️  {IntelConfig.DASHBOARD_TITLE}")
    print(f"📊 Query: {args.query}")
    print("=" * 60)

    try:
        state = engine.search_intelligence(args.query)
    except Exception as exc:
        log_exception(run_logger, exc, context="search_intelligence", query=args.query)
        write_json(Path(output_dir) / "error.json", get_error_info(exc, {"query": args.query}))
        print("❌ Search failed. Check logs for details.")
        return 1

    if state.used_fallback:
        print("ℹ️  Showing template data (no API key configured or the API call failed).")
    print("\n🧠 AI Analysis Summary")
    for summary in state.summaries:
        _print_block(summary)
        print()

    renderers = [name.strip() for name in args.renderers.split(",") if name.strip()]
    try:
        saved = file_manager.save_dashboard(
            state, active_filter=args.filter, output_dir=output_dir, renderers=renderers
        )
    except Exception as exc:
        log_exception(run_logger, exc, context="save_dashboard", query=args.query)
        print("❌ Failed to write dashboard artifacts.")
        return 1

    print("✅ Dashboard ready.")
    print(f"📁 Output directory: {saved['output_dir']}")
    return 1 if saved["failures"] else 0


if __name__ == "__main__":
    sys.exit(main())
