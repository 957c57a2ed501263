"""Unit tests for resolving the live status against the critical path."""

from __future__ import annotations

from pmc_tramline.tramline.models import ActivityRecord
from pmc_tramline.tramline.resolver import (
    AllIncomplete,
    Alternate,
    EndInsert,
    ErrorInsert,
    ErrorReplace,
    OnPath,
    Unknown,
    highest_index_with_transition,
    last_evidenced_index,
    resolve_position,
)
from pmc_tramline.workflow.definition import (
    TramlineDefinition,
    Transition,
    Workflow,
    WorkflowStateDef,
    normalize_alternates,
)


def _resolve(
    definition: TramlineDefinition,
    status: str | None,
    activities: list[ActivityRecord] | None = None,
):
    return resolve_position(
        definition.workflow,
        status,
        activities or [],
        definition.critical_path,
        definition.alternates,
        "2025-01-31",
    )


def test_last_evidenced_index_scans_past_gaps() -> None:
    path = ("A", "B", "C", "D")
    activities = [ActivityRecord(status="A"), ActivityRecord(status="C")]

    assert last_evidenced_index(path, {}, activities) == 2
    assert last_evidenced_index(path, {}, activities) + 1 == 3


def test_last_evidenced_index_counts_alternates() -> None:
    path = ("A", "B", "C")
    alternates = normalize_alternates({"C": ["C_ALT"]})
    assert last_evidenced_index(path, alternates, [ActivityRecord(status="C_ALT")]) == 2


def test_last_evidenced_index_without_evidence() -> None:
    assert last_evidenced_index(("A", "B"), {}, []) == -1
    assert last_evidenced_index(("A", "B"), {}, [ActivityRecord(status="OTHER")]) == -1


def test_highest_index_with_transition_prefers_later_states() -> None:
    workflow = Workflow(
        name="W",
        label="W",
        states={},
        transitions=(Transition("A", "ERR"), Transition("C", "ERR"), Transition(None, "ERR")),
    )
    assert highest_index_with_transition(workflow, ("A", "B", "C"), "ERR") == 2
    assert highest_index_with_transition(workflow, ("A", "B"), "ERR") == 0
    assert highest_index_with_transition(workflow, ("B",), "ERR") == -1


def test_undefined_status(toy_definition: TramlineDefinition) -> None:
    assert isinstance(_resolve(toy_definition, None), AllIncomplete)


def test_on_path_status(toy_definition: TramlineDefinition) -> None:
    assert _resolve(toy_definition, "APPROVED") == OnPath(index=2)


def test_alternate_status(toy_definition: TramlineDefinition) -> None:
    assert _resolve(toy_definition, "FROM_CACHE") == Alternate(index=1)
    # REJECTED is error-tagged with a modeled transition, but being an alternate wins.
    assert _resolve(toy_definition, "REJECTED") == Alternate(index=2)


def test_alternate_listed_twice_resolves_to_later_state(toy_workflow: Workflow) -> None:
    definition = TramlineDefinition.create(
        toy_workflow,
        ("START", "PROCESSING", "APPROVED", "COMPLETED"),
        {"PROCESSING": ["FROM_CACHE"], "COMPLETED": ["FROM_CACHE"]},
    )
    assert _resolve(definition, "FROM_CACHE") == Alternate(index=3)


def test_error_with_modeled_transition_replaces(toy_definition: TramlineDefinition) -> None:
    assert _resolve(toy_definition, "TIMED_OUT") == ErrorReplace(index=2)


def test_error_without_modeled_transition_inserts(toy_definition: TramlineDefinition) -> None:
    activities = [ActivityRecord(status="START"), ActivityRecord(status="APPROVED")]
    assert _resolve(toy_definition, "FAILED", activities) == ErrorInsert(index=3)
    assert _resolve(toy_definition, "FAILED") == ErrorInsert(index=0)


def test_non_error_end_state_inserts(toy_definition: TramlineDefinition) -> None:
    activities = [ActivityRecord(status="START"), ActivityRecord(status="FROM_CACHE")]
    assert _resolve(toy_definition, "ON_HOLD", activities) == EndInsert(index=2)


def test_unknown_status_carries_single_stop(toy_definition: TramlineDefinition) -> None:
    resolution = _resolve(
        toy_definition, "MYSTERY", [ActivityRecord(status="MYSTERY", date="2025-01-05")]
    )

    assert isinstance(resolution, Unknown)
    assert resolution.stop.title == "Unknown Status: MYSTERY"
    assert resolution.stop.subtitle == "2025-01-05"
    assert resolution.stop.error is True


def test_error_tagged_path_state_with_inbound_transition_replaces_source() -> None:
    workflow = Workflow(
        name="ABC",
        label="ABC",
        states={
            "A": WorkflowStateDef(name="A", label="A"),
            "B": WorkflowStateDef(name="B", label="B", tags=frozenset({"error"})),
            "C": WorkflowStateDef(name="C", label="C"),
        },
        transitions=(Transition("A", "B"),),
    )
    definition = TramlineDefinition.create(workflow, ("A", "B", "C"))
    assert _resolve(definition, "B") == ErrorReplace(index=0)
