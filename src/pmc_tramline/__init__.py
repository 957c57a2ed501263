"""PMC deposit tramline engine.

Reconciles a deposit's live status and its (possibly inconsistent) activity
log into the ordered progress trail shown on deposit pages:
- workflow definitions with a critical path and mutually exclusive alternates
- contradiction filtering, position resolution and stop building
- decoration with email processing warnings and errors
"""

__version__ = "0.1.0"

from pmc_tramline.config import TramlineSettings
from pmc_tramline.tramline import build_status_tramline, generate_tramline
from pmc_tramline.workflow import WorkflowRegistry

__all__ = [
    "__version__",
    "TramlineSettings",
    "WorkflowRegistry",
    "build_status_tramline",
    "generate_tramline",
]
