"""Workflow definitions consumed by the tramline engine.

This package holds first-class types for:
- Workflow states, their reserved tags, and modeled transitions
- Tramline definitions (critical path plus mutually exclusive alternates)
- The built-in PMC deposit workflow
- A registry that callers look definitions up in
"""

from .definition import (
    TramlineDefinition,
    Transition,
    Workflow,
    WorkflowDefinitionError,
    WorkflowStateDef,
    WorkflowTag,
    normalize_alternates,
)
from .pmc import PMC_DEPOSIT_WORKFLOW, PMC_TRAMLINE
from .registry import DuplicateWorkflowError, UnknownWorkflowError, WorkflowRegistry

__all__ = [
    "PMC_DEPOSIT_WORKFLOW",
    "PMC_TRAMLINE",
    "DuplicateWorkflowError",
    "TramlineDefinition",
    "Transition",
    "UnknownWorkflowError",
    "Workflow",
    "WorkflowDefinitionError",
    "WorkflowRegistry",
    "WorkflowStateDef",
    "WorkflowTag",
    "normalize_alternates",
]
