"""Build the ordered tramline (progress trail) for one entity.

The live status always decides position. Activities only fill in history
(dates, alternates that were taken, error outcomes) for stops at or before
that position; they never add, remove or reorder critical-path stops. The
only extra stop ever added is an unexpected failure or a non-error end state
that the critical path does not model.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import assert_never

from pmc_tramline.workflow.definition import (
    AlternatesInput,
    Workflow,
    WorkflowTag,
    normalize_alternates,
)

from .contradictions import filter_contradictions
from .models import ActivityRecord, TramlineResult, TramStop, find_activity
from .resolver import (
    AllIncomplete,
    Alternate,
    EndInsert,
    ErrorInsert,
    ErrorReplace,
    OnPath,
    Resolution,
    Unknown,
    resolve_position,
)

logger = logging.getLogger(__name__)


def _stop(
    workflow: Workflow,
    status: str,
    *,
    completed: bool,
    error: bool,
    subtitle: str | None,
) -> TramStop:
    # Tag-derived flags apply whether or not an override happened.
    return TramStop(
        title=workflow.label_for(status),
        status=status,
        completed=completed,
        error=error or workflow.has_tag(status, WorkflowTag.ERROR),
        warning=workflow.has_tag(status, WorkflowTag.WARNING),
        subtitle=subtitle,
    )


def _inserted_stop(
    workflow: Workflow,
    resolution: ErrorInsert | EndInsert,
    status: str,
    activities: Sequence[ActivityRecord],
    fallback_timestamp: str | None,
) -> TramStop:
    activity = find_activity(activities, status)
    return _stop(
        workflow,
        status,
        completed=True,
        error=isinstance(resolution, ErrorInsert),
        subtitle=(activity.date if activity is not None else None) or fallback_timestamp,
    )


def _is_ended(
    workflow: Workflow, resolution: Resolution, current_status: str, stops: Sequence[TramStop]
) -> bool:
    if isinstance(resolution, OnPath):
        return workflow.has_tag(stops[resolution.index].status, WorkflowTag.END)
    if isinstance(resolution, (Alternate, ErrorReplace, ErrorInsert, EndInsert)):
        return workflow.has_tag(current_status, WorkflowTag.END)
    if isinstance(resolution, AllIncomplete):
        return False
    if isinstance(resolution, Unknown):
        return True
    assert_never(resolution)


def generate_tramline(
    workflow: Workflow,
    current_status: str | None,
    activities: Sequence[ActivityRecord] = (),
    critical_path: Sequence[str] = (),
    alternates: AlternatesInput | None = None,
    fallback_timestamp: str | None = None,
) -> TramlineResult:
    """Produce the tramline stops and whether the workflow has ended.

    Args:
        workflow: States (labels, tags) and modeled transitions.
        current_status: The entity's live status; ``None`` when not set.
        activities: Status-change records, ascending by time.
        critical_path: The ordered happy-path states.
        alternates: Critical-path state -> mutually exclusive alternates
            (a bare string is accepted for a single alternate).
        fallback_timestamp: Date shown on the current stop when it has no
            activity of its own, typically the entity's last-modified time.

    Returns:
        A fresh result; inputs are never modified.
    """

    if not critical_path:
        return TramlineResult(tramline=[], ended=False)

    path = tuple(critical_path)
    alternates_by_state = normalize_alternates(alternates)

    filtered = filter_contradictions(activities, current_status, path, alternates_by_state)
    resolution = resolve_position(
        workflow, current_status, filtered, path, alternates_by_state, fallback_timestamp
    )
    logger.debug(
        "Resolved tramline position",
        extra={
            "workflow": workflow.name,
            "status": current_status,
            "mode": type(resolution).__name__,
        },
    )

    if isinstance(resolution, Unknown):
        return TramlineResult(tramline=[resolution.stop], ended=True)
    if current_status is None or isinstance(resolution, AllIncomplete):
        return TramlineResult(
            tramline=[
                _stop(workflow, state, completed=False, error=False, subtitle=None)
                for state in path
            ],
            ended=False,
        )

    index = resolution.index
    inserting = isinstance(resolution, (ErrorInsert, EndInsert))
    error_activities = [a for a in filtered if workflow.has_tag(a.status, WorkflowTag.ERROR)]

    stops: list[TramStop] = []
    for i, state in enumerate(path):
        use_activity = i < index if inserting else i <= index
        completed = use_activity
        error = False
        display = state
        activity = find_activity(filtered, state) if use_activity else None
        state_alternates = alternates_by_state.get(state, ())

        is_current_alternate = (
            isinstance(resolution, Alternate) and i == index and current_status in state_alternates
        )
        if is_current_alternate:
            display = current_status
            activity = find_activity(filtered, current_status)
        elif state_alternates and activity is None and use_activity:
            # A recorded critical-path state always beats its alternates.
            for alternate in state_alternates:
                alternate_activity = find_activity(filtered, alternate)
                if alternate_activity is not None:
                    display = alternate
                    activity = alternate_activity
                    break

        if isinstance(resolution, ErrorReplace) and i == index:
            display = current_status
            activity = find_activity(filtered, current_status)
            completed = True
            error = True
        elif isinstance(resolution, OnPath) and state == current_status:
            for error_activity in error_activities:
                if workflow.has_transition(state, error_activity.status):
                    display = error_activity.status
                    activity = error_activity
                    completed = True
                    error = True
                    break

        subtitle = activity.date if activity is not None else None
        if not subtitle and i == index:
            subtitle = fallback_timestamp

        stops.append(_stop(workflow, display, completed=completed, error=error, subtitle=subtitle))

    if isinstance(resolution, (ErrorInsert, EndInsert)):
        stops.insert(
            index,
            _inserted_stop(workflow, resolution, current_status, filtered, fallback_timestamp),
        )
        for i in range(index + 1, len(stops)):
            if stops[i].completed:
                stops[i] = replace(stops[i], completed=False)
    elif isinstance(resolution, ErrorReplace) and index >= len(path):
        activity = find_activity(filtered, current_status)
        stops.append(
            _stop(
                workflow,
                current_status,
                completed=True,
                error=True,
                subtitle=(activity.date if activity is not None else None) or fallback_timestamp,
            )
        )

    return TramlineResult(
        tramline=stops, ended=_is_ended(workflow, resolution, current_status, stops)
    )
