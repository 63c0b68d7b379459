"""Logging handlers that write one file per module, rotated per run.

ModuleDispatchHandler sends project records to the file picked by
MODULE_TO_LOG. ThirdPartyHandler collects library records (httpx, httpcore)
in run-3p.log. configure_logging() pairs them with FirstPartyFilter so each
record lands in exactly one of the two.

Writes are synchronous; at a few lines per lookup that is fine on the event
loop.
"""

import logging
from pathlib import Path
from typing import TextIO

from .run_manager import is_first_party, module_to_log_name, should_rotate


class _RunLogFiles:
    """Open append streams for <log_dir>/<name>.log, keyed by name.

    The first write of a run moves <name>.log to <name>.previous.log
    (replacing the older one) before writing.
    """

    def __init__(self, log_dir: Path):
        self.log_dir = Path(log_dir)
        self.streams: dict[str, TextIO] = {}

    def path(self, log_name: str, previous: bool = False) -> Path:
        suffix = ".previous.log" if previous else ".log"
        return self.log_dir / f"{log_name}{suffix}"

    def stream(self, log_name: str) -> TextIO:
        if should_rotate(log_name):
            self._rotate(log_name)
        if log_name not in self.streams:
            self.streams[log_name] = self.path(log_name).open("a", encoding="utf-8")
        return self.streams[log_name]

    def _rotate(self, log_name: str) -> None:
        old = self.streams.pop(log_name, None)
        if old is not None:
            old.close()
        current = self.path(log_name)
        if current.exists():
            current.replace(self.path(log_name, previous=True))

    def close(self) -> None:
        for stream in self.streams.values():
            try:
                stream.close()
            except OSError:
                pass
        self.streams.clear()


class FirstPartyFilter(logging.Filter):
    """Pass records from project loggers only (or only others, if inverted)."""

    def __init__(self, invert: bool = False):
        super().__init__()
        self.invert = invert

    def filter(self, record: logging.LogRecord) -> bool:
        return is_first_party(record.name) != self.invert


class _RunFileHandler(logging.Handler):
    """Base for handlers writing to run-rotated files under one directory."""

    def __init__(self, log_dir: Path):
        super().__init__()
        self.log_dir = Path(log_dir)
        self._files = _RunLogFiles(self.log_dir)

    def log_name_for(self, record: logging.LogRecord) -> str:
        raise NotImplementedError

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = self._files.stream(self.log_name_for(record))
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)

    @property
    def _file_cache(self) -> dict[str, TextIO]:
        return self._files.streams

    def close(self) -> None:
        self.acquire()
        try:
            self._files.close()
        finally:
            self.release()
        super().close()


class ModuleDispatchHandler(_RunFileHandler):
    """Routes each record to logs/<module log>.log.

    Files are opened on first use and kept open, so one handler serves every
    module.

    Usage:
        handler = ModuleDispatchHandler(Path("logs"))
        handler.addFilter(FirstPartyFilter())
        logging.getLogger().addHandler(handler)
    """

    def log_name_for(self, record: logging.LogRecord) -> str:
        return module_to_log_name(record.name)


class ThirdPartyHandler(_RunFileHandler):
    """Writes every record to logs/run-3p.log."""

    LOG_NAME = "run-3p"

    def log_name_for(self, record: logging.LogRecord) -> str:
        return self.LOG_NAME
