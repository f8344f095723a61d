"""
Logging Utilities for the Defense Intelligence Dashboard

Sets up per-run file logging next to the rendered dashboard and gives the
CLI one place to record failures with their context.
"""

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


def setup_run_logging(output_dir: str, query: str) -> Tuple[logging.Logger, str]:
    """
    Configure the root logger for one dashboard run.

    Args:
        output_dir: Directory the dashboard artifacts are written to
        query: Search topic, recorded in the log header

    Returns:
        Tuple of (run_logger instance, log_file_path)
    """
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_filename = f"run_log_{timestamp}.log"
    log_file_path = str(Path(output_dir) / log_filename)

    Path(output_dir).mkdir(parents=True, exist_ok=True)

    # Root logger so module loggers inherit the handlers
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    file_handler = logging.FileHandler(log_file_path, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    )
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    run_logger = logging.getLogger('intel_run')
    run_logger.setLevel(logging.DEBUG)

    run_logger.info("=" * 70)
    run_logger.info("Defense Intelligence Dashboard - Run Log")
    run_logger.info(f"Query: {query}")
    run_logger.info(f"Output Directory: {output_dir}")
    run_logger.info(f"Log File: {log_filename}")
    run_logger.info(f"Started: {datetime.now().isoformat()}")
    run_logger.info("=" * 70)

    return run_logger, log_file_path


def log_exception(logger: logging.Logger, exc: Exception, context: str = "",
                  query: Optional[str] = None, **kwargs) -> None:
    """
    Log an exception with its traceback and any run context.

    Args:
        logger: Logger instance to use
        exc: Exception that was raised
        context: Short label for the failing step
        query: Search topic for context
        **kwargs: Additional context key-value pairs
    """
    error_msg = f"Exception occurred: {type(exc).__name__}: {exc}"
    if context:
        error_msg = f"{context} - {error_msg}"
    logger.error(error_msg)
    logger.error(f"Traceback:\n{traceback.format_exc()}")
    if query:
        logger.error(f"Query: {query}")
    if kwargs:
        logger.error(f"Context: {kwargs}")


def get_error_info(exc: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Structured error payload stored in the run metadata."""
    return {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
        "traceback": traceback.format_exc(),
        "timestamp": datetime.now().isoformat(),
        "context": context or {},
    }
