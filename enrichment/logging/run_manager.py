"""Run tracking for per-module log files.

A run is one unit of work whose logs should be kept together: a single
enrichment request, a CLI lookup, a test module. Each log file is rotated on
its first write inside a run, so <name>.log always holds the latest run and
<name>.previous.log the one before it.

Usage:
    from enrichment.logging import start_run, end_run

    start_run("enrich-42")
    try:
        url = await registry.get_image("cinema", "Pulp Fiction", "1994")
    finally:
        end_run()
"""

from contextvars import ContextVar
from dataclasses import dataclass, field


@dataclass
class _RunState:
    run_id: str
    rotated: set[str] = field(default_factory=set)


# Held in a ContextVar so concurrent requests on one event loop each see their own run
_run_state: ContextVar[_RunState | None] = ContextVar("enrichment_log_run", default=None)

# Log file per module prefix; the longest matching prefix wins, anything
# unmatched lands in misc.log
MODULE_TO_LOG = {
    "enrichment.images.providers": "image-providers",
    "enrichment.images.registry": "image-registry",
    "enrichment.images": "images",
    "enrichment.utils": "utils",
    "enrichment.config": "config",
    "enrichment.logging": "logging-internal",
    "scripts": "scripts",
    "testing": "testing",
    "__main__": "scripts",
}

FIRST_PARTY_PREFIXES = ("enrichment", "scripts", "testing", "__main__")

_PREFIXES_LONGEST_FIRST = sorted(MODULE_TO_LOG, key=len, reverse=True)

# Logger name -> log name; logger names are fixed for the life of the process
_module_log_cache: dict[str, str] = {}


def start_run(run_id: str) -> None:
    """Begin a run. Calling again starts a fresh run with nothing rotated yet.

    Args:
        run_id: Identifier for the run (request id, script invocation, test)
    """
    _run_state.set(_RunState(run_id))


def end_run() -> None:
    """Leave the current run.

    Rotation only depends on start_run(), so skipping this is harmless.
    """
    _run_state.set(None)


def get_current_run_id() -> str | None:
    state = _run_state.get()
    return state.run_id if state else None


def should_rotate(log_name: str) -> bool:
    """True on the first write to log_name within the active run.

    Outside a run nothing is rotated and files are appended to.
    """
    state = _run_state.get()
    if state is None or log_name in state.rotated:
        return False
    state.rotated.add(log_name)
    return True


def is_first_party(logger_name: str) -> bool:
    """Whether a logger belongs to this project rather than a library."""
    return logger_name.split(".", 1)[0] in FIRST_PARTY_PREFIXES


def module_to_log_name(module_name: str) -> str:
    """Log file name (without extension) for a logger name.

    >>> module_to_log_name("enrichment.images.providers.tmdb")
    'image-providers'
    """
    name = _module_log_cache.get(module_name)
    if name is None:
        name = _module_log_cache[module_name] = _compute_log_name(module_name)
    return name


def _compute_log_name(module_name: str) -> str:
    for prefix in _PREFIXES_LONGEST_FIRST:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return MODULE_TO_LOG[prefix]
    return "misc"
