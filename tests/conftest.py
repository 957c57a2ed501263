"""Test configuration and fixtures."""

from __future__ import annotations

import pytest

from pmc_tramline.workflow.definition import (
    TramlineDefinition,
    Transition,
    Workflow,
    WorkflowStateDef,
)
from pmc_tramline.workflow.pmc import PMC_TRAMLINE

TOY_CRITICAL_PATH = ("START", "PROCESSING", "APPROVED", "COMPLETED")

# PROCESSING uses the legacy single-string alternate shape on purpose.
TOY_ALTERNATES: dict[str, str | list[str]] = {
    "PROCESSING": "FROM_CACHE",
    "APPROVED": ["REJECTED"],
}


def _state(name: str, label: str, *tags: str) -> WorkflowStateDef:
    return WorkflowStateDef(name=name, label=label, tags=frozenset(tags))


def make_toy_workflow() -> Workflow:
    states = [
        _state("START", "Started"),
        _state("PROCESSING", "Processing"),
        _state("FROM_CACHE", "Served From Cache"),
        _state("APPROVED", "Approved"),
        _state("REJECTED", "Rejected", "error", "end"),
        _state("COMPLETED", "Completed", "end"),
        _state("FAILED", "Failed", "error", "end"),
        _state("TIMED_OUT", "Timed Out", "error"),
        _state("ON_HOLD", "On Hold", "warning", "end"),
        _state("ARCHIVED", "Archived"),
    ]
    transitions = [
        Transition("START", "PROCESSING"),
        Transition("START", "FROM_CACHE"),
        Transition("PROCESSING", "APPROVED"),
        Transition("FROM_CACHE", "APPROVED"),
        Transition("PROCESSING", "REJECTED"),
        Transition("APPROVED", "COMPLETED"),
        Transition("APPROVED", "TIMED_OUT"),
        Transition("PROCESSING", "ON_HOLD"),
        Transition(None, "FAILED"),
    ]
    return Workflow(
        name="TOY",
        label="Toy Workflow",
        states={s.name: s for s in states},
        transitions=tuple(transitions),
    )


@pytest.fixture
def toy_workflow() -> Workflow:
    """Provide a small workflow exercising every resolution mode."""
    return make_toy_workflow()


@pytest.fixture
def toy_definition(toy_workflow: Workflow) -> TramlineDefinition:
    """Provide the toy workflow with its critical path and alternates."""
    return TramlineDefinition.create(toy_workflow, TOY_CRITICAL_PATH, TOY_ALTERNATES)


@pytest.fixture
def pmc_definition() -> TramlineDefinition:
    """Provide the built-in PMC deposit tramline."""
    return PMC_TRAMLINE
