"""Unit tests for activity-log contradiction filtering."""

from __future__ import annotations

from pmc_tramline.tramline.contradictions import filter_contradictions
from pmc_tramline.tramline.models import ActivityRecord
from pmc_tramline.workflow.definition import normalize_alternates

PATH = ("PENDING", "DEPOSITED", "CONFIRMED")
ALTERNATES = normalize_alternates({"CONFIRMED": ["REJECTED"], "DEPOSITED": "NO_ACTION"})


def _records(*statuses: str) -> list[ActivityRecord]:
    return [ActivityRecord(status=s, date=f"2025-01-0{i + 1}") for i, s in enumerate(statuses)]


def _statuses(records: list[ActivityRecord]) -> list[str]:
    return [r.status for r in records]


def test_consistent_history_is_kept_in_order() -> None:
    activities = _records("PENDING", "DEPOSITED", "CONFIRMED")
    assert filter_contradictions(activities, "CONFIRMED", PATH, ALTERNATES) == activities


def test_critical_state_after_its_alternate_truncates() -> None:
    activities = _records("PENDING", "DEPOSITED", "REJECTED", "CONFIRMED", "EXTRA")
    kept = filter_contradictions(activities, "REJECTED", PATH, ALTERNATES)
    assert _statuses(kept) == ["PENDING", "DEPOSITED", "REJECTED"]


def test_alternate_after_its_critical_state_truncates() -> None:
    activities = _records("PENDING", "DEPOSITED", "CONFIRMED", "REJECTED", "EXTRA")
    kept = filter_contradictions(activities, "CONFIRMED", PATH, ALTERNATES)
    assert _statuses(kept) == ["PENDING", "DEPOSITED", "CONFIRMED"]


def test_dropped_live_status_is_re_appended() -> None:
    activities = _records("PENDING", "DEPOSITED", "NO_ACTION", "CONFIRMED")
    kept = filter_contradictions(activities, "CONFIRMED", PATH, ALTERNATES)

    assert _statuses(kept) == ["PENDING", "DEPOSITED", "CONFIRMED"]
    assert kept[-1] is activities[-1]


def test_live_status_not_in_log_is_not_invented() -> None:
    activities = _records("PENDING", "DEPOSITED", "REJECTED", "CONFIRMED")
    kept = filter_contradictions(activities, "SOMETHING_ELSE", PATH, ALTERNATES)
    assert _statuses(kept) == ["PENDING", "DEPOSITED", "REJECTED"]


def test_no_live_status_keeps_only_prefix() -> None:
    activities = _records("PENDING", "CONFIRMED", "REJECTED")
    kept = filter_contradictions(activities, None, PATH, ALTERNATES)
    assert _statuses(kept) == ["PENDING", "CONFIRMED"]


def test_input_list_is_left_untouched() -> None:
    activities = _records("PENDING", "REJECTED", "CONFIRMED")
    snapshot = list(activities)

    kept = filter_contradictions(activities, "CONFIRMED", PATH, ALTERNATES)

    assert activities == snapshot
    assert kept is not activities
