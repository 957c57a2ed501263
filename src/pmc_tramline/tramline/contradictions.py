"""Prune contradictory events from an activity log.

Duplicate or out-of-order delivery can leave both a critical-path status and
one of its mutually exclusive alternates (e.g. "confirmed" and "rejected") in
the same history. Only the prefix before the first contradiction is kept, and
the live status is never lost.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pmc_tramline.workflow.definition import Alternates

from .models import ActivityRecord

logger = logging.getLogger(__name__)


def _alternate_to_critical(alternates: Alternates) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for critical, values in alternates.items():
        for alternate in values:
            lookup[alternate] = critical
    return lookup


def filter_contradictions(
    activities: Sequence[ActivityRecord],
    current_status: str | None,
    critical_path: Sequence[str],
    alternates: Alternates,
) -> list[ActivityRecord]:
    """Return the chronological prefix of `activities` free of contradictions.

    A contradiction is a critical-path status recorded after one of its
    alternates, or an alternate recorded after its critical-path status.
    Everything from the first contradiction on is dropped, except that an
    activity for `current_status` is re-appended if it was lost.
    """

    alternate_to_critical = _alternate_to_critical(alternates)
    on_path = set(critical_path)

    kept: list[ActivityRecord] = []
    seen: set[str] = set()
    current_activity: ActivityRecord | None = None
    cut_at: int | None = None

    for index, activity in enumerate(activities):
        status = activity.status
        if current_status is not None and status == current_status:
            current_activity = activity

        if cut_at is not None:
            continue

        if status in on_path:
            contradiction = any(alt in seen for alt in alternates.get(status, ()))
        else:
            critical = alternate_to_critical.get(status)
            contradiction = critical is not None and critical in seen

        if contradiction:
            cut_at = index
            continue

        kept.append(activity)
        seen.add(status)

    if cut_at is not None:
        logger.debug(
            "Activity log truncated at contradiction",
            extra={
                "status": activities[cut_at].status,
                "kept": len(kept),
                "dropped": len(activities) - len(kept),
            },
        )

    if current_activity is not None and current_status not in seen:
        logger.debug("Re-appending live status activity", extra={"status": current_status})
        kept.append(current_activity)

    return kept
