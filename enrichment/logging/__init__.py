"""Per-module log files for the enrichment service, rotated per run.

Every module keeps the usual ``logger = logging.getLogger(__name__)``; the
handlers installed by enrichment.config.configure_logging() decide the file.
Wrap each unit of work in a run so its logs replace the previous run's:

    from enrichment.logging import start_run, end_run

    start_run("enrich-123")
    try:
        url = await registry.get_image("book", "Dune")
    finally:
        end_run()

Files under logs/ (or ENRICHMENT_LOG_DIR):
    - image-providers.log, image-registry.log, images.log, ... (project code)
    - run-3p.log (httpx and other libraries)
    - *.previous.log (the run before)
"""

from enrichment.logging.handlers import (
    FirstPartyFilter,
    ModuleDispatchHandler,
    ThirdPartyHandler,
)
from enrichment.logging.run_manager import (
    MODULE_TO_LOG,
    end_run,
    get_current_run_id,
    is_first_party,
    module_to_log_name,
    start_run,
)

__all__ = [
    "start_run",
    "end_run",
    "get_current_run_id",
    "is_first_party",
    "module_to_log_name",
    "FirstPartyFilter",
    "ModuleDispatchHandler",
    "ThirdPartyHandler",
    "MODULE_TO_LOG",
]
