"""Map the live status onto the critical path.

The result is one of a closed set of resolution modes. Each mode carries only
the data that makes sense for it, so the builder never has to reconcile
contradictory flags.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pmc_tramline.workflow.definition import Alternates, Workflow, WorkflowTag

from .models import ActivityRecord, TramStop, find_activity

logger = logging.getLogger(__name__)

UNKNOWN_STATUS_TITLE = "Unknown Status: {status}"


@dataclass(frozen=True, slots=True)
class AllIncomplete:
    """No live status: nothing is complete."""

    index: int = -1


@dataclass(frozen=True, slots=True)
class OnPath:
    index: int


@dataclass(frozen=True, slots=True)
class Alternate:
    """The live status stands in for the critical-path state at `index`."""

    index: int


@dataclass(frozen=True, slots=True)
class ErrorReplace:
    """An error reached by a modeled transition; it replaces the stop at `index`."""

    index: int


@dataclass(frozen=True, slots=True)
class ErrorInsert:
    """An unexpected failure, inserted as a new stop at `index`."""

    index: int


@dataclass(frozen=True, slots=True)
class EndInsert:
    """A non-error terminal detour, inserted as a new stop at `index`."""

    index: int


@dataclass(frozen=True, slots=True)
class Unknown:
    stop: TramStop


Resolution = AllIncomplete | OnPath | Alternate | ErrorReplace | ErrorInsert | EndInsert | Unknown
InsertResolution = ErrorInsert | EndInsert


def last_evidenced_index(
    critical_path: Sequence[str],
    alternates: Alternates,
    activities: Sequence[ActivityRecord],
) -> int:
    """Highest critical-path index with evidence in `activities`, or -1.

    A state counts as evidenced when it or any of its alternates has an
    activity. The whole path is scanned; gaps do not stop the search.
    """

    recorded = {a.status for a in activities}
    last = -1
    for index, state in enumerate(critical_path):
        if state in recorded or any(alt in recorded for alt in alternates.get(state, ())):
            last = index
    return last


def highest_index_with_transition(
    workflow: Workflow, critical_path: Sequence[str], target: str
) -> int:
    """Highest critical-path index with a modeled transition into `target`, or -1."""

    for index in range(len(critical_path) - 1, -1, -1):
        if workflow.has_transition(critical_path[index], target):
            return index
    return -1


def _alternate_index(critical_path: Sequence[str], alternates: Alternates, status: str) -> int:
    # Later states win when several list the same alternate.
    for index in range(len(critical_path) - 1, -1, -1):
        if status in alternates.get(critical_path[index], ()):
            return index
    return -1


def resolve_position(
    workflow: Workflow,
    current_status: str | None,
    activities: Sequence[ActivityRecord],
    critical_path: Sequence[str],
    alternates: Alternates,
    fallback_timestamp: str | None = None,
) -> Resolution:
    """Resolve where `current_status` sits relative to the critical path.

    `activities` must already be free of contradictions.
    """

    if current_status is None:
        return AllIncomplete()

    is_error = workflow.has_tag(current_status, WorkflowTag.ERROR)

    if current_status in critical_path:
        if is_error:
            source = highest_index_with_transition(workflow, critical_path, current_status)
            if source != -1:
                return ErrorReplace(index=source)
        return OnPath(index=critical_path.index(current_status))

    alternate = _alternate_index(critical_path, alternates, current_status)
    if alternate != -1:
        return Alternate(index=alternate)

    if is_error:
        source = highest_index_with_transition(workflow, critical_path, current_status)
        if source != -1:
            return ErrorReplace(index=source)
        return ErrorInsert(index=last_evidenced_index(critical_path, alternates, activities) + 1)

    if workflow.has_tag(current_status, WorkflowTag.END):
        return EndInsert(index=last_evidenced_index(critical_path, alternates, activities) + 1)

    logger.warning(
        "Status is not part of the workflow tramline",
        extra={"workflow": workflow.name, "status": current_status},
    )
    activity = find_activity(activities, current_status)
    return Unknown(
        stop=TramStop(
            title=UNKNOWN_STATUS_TITLE.format(status=current_status),
            status=current_status,
            completed=True,
            error=True,
            warning=False,
            subtitle=(activity.date if activity is not None else None) or fallback_timestamp,
        )
    )
