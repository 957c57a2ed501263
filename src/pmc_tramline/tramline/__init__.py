"""Tramline reconciliation.

Pipeline stages, each pure and synchronous:
- contradiction filtering of the activity log
- resolving the live status against the critical path
- building the ordered stops
- decorating stops with email processing outcomes
"""

from .builder import generate_tramline
from .contradictions import filter_contradictions
from .models import ActivityRecord, TramlineResult, TramStop, activities_from_log
from .outcomes import (
    EmailProcessingMessage,
    decorate_tramline_with_email_processing_outcomes,
    extract_email_processing_messages,
)
from .resolver import last_evidenced_index, resolve_position
from .service import build_status_tramline

__all__ = [
    "ActivityRecord",
    "EmailProcessingMessage",
    "TramStop",
    "TramlineResult",
    "activities_from_log",
    "build_status_tramline",
    "decorate_tramline_with_email_processing_outcomes",
    "extract_email_processing_messages",
    "filter_contradictions",
    "generate_tramline",
    "last_evidenced_index",
    "resolve_position",
]
