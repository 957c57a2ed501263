from __future__ import annotations

from collections.abc import Iterable, Mapping

from pmc_tramline.workflow.definition import TramlineDefinition

from .builder import generate_tramline
from .models import ActivityRecord, TramlineResult, activities_from_log
from .outcomes import decorate_tramline_with_email_processing_outcomes


def build_status_tramline(
    definition: TramlineDefinition,
    current_status: str | None,
    activities: Iterable[ActivityRecord | Mapping[str, object]] = (),
    *,
    fallback_timestamp: str | None = None,
    metadata: object = None,
) -> TramlineResult:
    """Build and decorate the tramline for one entity.

    `activities` may be activity records or raw status-change log rows
    (``{status, date}`` / ``{status, date_created}``), ascending by time.
    `metadata` is the entity's metadata document holding email processing
    outcomes, if any.
    """

    records: list[ActivityRecord] = []
    for item in activities:
        if isinstance(item, ActivityRecord):
            records.append(item)
        else:
            records.extend(activities_from_log([item]))

    base = generate_tramline(
        definition.workflow,
        current_status,
        records,
        definition.critical_path,
        definition.alternates,
        fallback_timestamp,
    )
    return TramlineResult(
        tramline=decorate_tramline_with_email_processing_outcomes(base.tramline, metadata),
        ended=base.ended,
    )
