from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum


class WorkflowTag(str, Enum):
    """Reserved workflow state tags the tramline engine reacts to."""

    ERROR = "error"
    WARNING = "warning"
    END = "end"


class WorkflowDefinitionError(ValueError):
    pass


AlternatesInput = Mapping[str, str | Iterable[str]]
Alternates = dict[str, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class WorkflowStateDef:
    name: str
    label: str
    tags: frozenset[str] = frozenset()

    def has_tag(self, tag: WorkflowTag) -> bool:
        return tag.value in self.tags

    def to_json(self) -> dict[str, object]:
        return {"name": self.name, "label": self.label, "tags": sorted(self.tags)}


@dataclass(frozen=True, slots=True)
class Transition:
    """A modeled transition. A ``None`` source means "from any state"."""

    source_state_name: str | None
    target_state_name: str
    name: str | None = None

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {
            "sourceStateName": self.source_state_name,
            "targetStateName": self.target_state_name,
        }
        if self.name is not None:
            out["name"] = self.name
        return out


@dataclass(frozen=True, slots=True)
class Workflow:
    name: str
    label: str
    states: Mapping[str, WorkflowStateDef]
    transitions: tuple[Transition, ...] = ()

    def has_tag(self, status: str | None, tag: WorkflowTag) -> bool:
        if status is None:
            return False
        state = self.states.get(status)
        return state is not None and state.has_tag(tag)

    def has_transition(self, source: str, target: str) -> bool:
        """True only for a transition modeled from exactly ``source``.

        Wildcard transitions (``source_state_name is None``) do not count.
        """

        return any(
            t.source_state_name == source and t.target_state_name == target
            for t in self.transitions
        )

    def label_for(self, status: str) -> str:
        state = self.states.get(status)
        return state.label if state is not None and state.label else status

    def to_json(self) -> dict[str, object]:
        return {
            "name": self.name,
            "label": self.label,
            "states": {name: state.to_json() for name, state in self.states.items()},
            "transitions": [t.to_json() for t in self.transitions],
        }

    @staticmethod
    def from_json(obj: Mapping[str, object]) -> Workflow:
        states_raw = obj.get("states")
        if not isinstance(states_raw, Mapping):
            raise WorkflowDefinitionError("Workflow definition requires a 'states' mapping")

        states: dict[str, WorkflowStateDef] = {}
        for key, raw in states_raw.items():
            if not isinstance(raw, Mapping):
                raise WorkflowDefinitionError(f"State {key!r} must be a mapping")
            name_raw = raw.get("name")
            name = name_raw if isinstance(name_raw, str) and name_raw else str(key)
            label_raw = raw.get("label")
            label = label_raw if isinstance(label_raw, str) else name
            tags_raw = raw.get("tags") or []
            if isinstance(tags_raw, str) or not isinstance(tags_raw, Iterable):
                raise WorkflowDefinitionError(f"State {key!r} tags must be a list of strings")
            states[str(key)] = WorkflowStateDef(
                name=name, label=label, tags=frozenset(str(t) for t in tags_raw)
            )

        transitions_raw = obj.get("transitions") or []
        if not isinstance(transitions_raw, list):
            raise WorkflowDefinitionError("Workflow 'transitions' must be a list")

        transitions: list[Transition] = []
        for raw in transitions_raw:
            if not isinstance(raw, Mapping):
                raise WorkflowDefinitionError("Each transition must be a mapping")
            source = raw.get("sourceStateName")
            target = raw.get("targetStateName")
            if not isinstance(target, str) or not (source is None or isinstance(source, str)):
                raise WorkflowDefinitionError(f"Malformed transition: {dict(raw)!r}")
            name = raw.get("name")
            transitions.append(
                Transition(
                    source_state_name=source,
                    target_state_name=target,
                    name=name if isinstance(name, str) else None,
                )
            )

        name_raw = obj.get("name")
        label_raw = obj.get("label")
        name = name_raw if isinstance(name_raw, str) else ""
        return Workflow(
            name=name,
            label=label_raw if isinstance(label_raw, str) else name,
            states=states,
            transitions=tuple(transitions),
        )


def normalize_alternates(alternates: AlternatesInput | None) -> Alternates:
    """Normalize the legacy ``str | list[str]`` alternates shape.

    Order is preserved (it decides which alternate is substituted first) and
    duplicates are dropped.
    """

    out: Alternates = {}
    for critical, value in (alternates or {}).items():
        values = [value] if isinstance(value, str) else list(value)
        out[critical] = tuple(dict.fromkeys(v for v in values if v))
    return out


@dataclass(frozen=True, slots=True)
class TramlineDefinition:
    """Everything needed to draw a tramline for entities of one workflow."""

    workflow: Workflow
    critical_path: tuple[str, ...]
    alternates: Alternates = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.workflow.name

    @staticmethod
    def create(
        workflow: Workflow,
        critical_path: Iterable[str],
        alternates: AlternatesInput | None = None,
    ) -> TramlineDefinition:
        return TramlineDefinition(
            workflow=workflow,
            critical_path=tuple(critical_path),
            alternates=normalize_alternates(alternates),
        )

    def to_json(self) -> dict[str, object]:
        return {
            "workflow": self.workflow.to_json(),
            "criticalPath": list(self.critical_path),
            "alternates": {k: list(v) for k, v in self.alternates.items()},
        }

    @staticmethod
    def from_json(obj: Mapping[str, object]) -> TramlineDefinition:
        workflow_raw = obj.get("workflow")
        if not isinstance(workflow_raw, Mapping):
            raise WorkflowDefinitionError("Tramline definition requires a 'workflow' mapping")

        path_raw = obj.get("criticalPath") or []
        if not isinstance(path_raw, list) or not all(isinstance(s, str) for s in path_raw):
            raise WorkflowDefinitionError("'criticalPath' must be a list of state names")

        alternates_raw = obj.get("alternates") or {}
        if not isinstance(alternates_raw, Mapping):
            raise WorkflowDefinitionError("'alternates' must be a mapping")
        for key, value in alternates_raw.items():
            if not isinstance(value, str) and not (
                isinstance(value, list) and all(isinstance(v, str) for v in value)
            ):
                raise WorkflowDefinitionError(
                    f"Alternates for {key!r} must be a string or a list of strings"
                )

        return TramlineDefinition.create(
            Workflow.from_json(workflow_raw), path_raw, alternates_raw
        )
