"""Enrichment service configuration and logging setup."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from enrichment.logging import FirstPartyFilter, ModuleDispatchHandler, ThirdPartyHandler

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def is_dev_mode() -> bool:
    """Check if running in development mode.

    Returns:
        True if ENRICHMENT_MODE is set to 'dev', False otherwise.
    """
    return os.getenv("ENRICHMENT_MODE", "prod").lower() == "dev"


def get_log_dir() -> Path:
    """Log directory from ENRICHMENT_LOG_DIR (default: ./logs), created on demand."""
    log_dir = Path(os.getenv("ENRICHMENT_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def configure_logging(
    log_dir: Path | None = None,
    level: int | None = None,
    console: bool = True,
) -> None:
    """Install per-module file handlers on the root logger.

    Project loggers go to logs/<module>.log, library loggers to
    logs/run-3p.log. Calling this again replaces the handlers it installed
    earlier rather than stacking duplicates.

    Args:
        log_dir: Directory for log files (default: get_log_dir())
        level: Root level (default: DEBUG in dev mode, INFO otherwise)
        console: Also echo records to stderr
    """
    if log_dir is None:
        log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    if level is None:
        level = logging.DEBUG if is_dev_mode() else logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_enrichment_handler", False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    module_handler = ModuleDispatchHandler(log_dir)
    module_handler.addFilter(FirstPartyFilter())

    third_party_handler = ThirdPartyHandler(log_dir)
    third_party_handler.addFilter(FirstPartyFilter(invert=True))

    handlers: list[logging.Handler] = [module_handler, third_party_handler]
    if console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._enrichment_handler = True
        root.addHandler(handler)

    root.setLevel(level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
