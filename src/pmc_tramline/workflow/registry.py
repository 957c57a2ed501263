from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from .definition import TramlineDefinition, WorkflowDefinitionError
from .pmc import PMC_TRAMLINE

if TYPE_CHECKING:
    from pmc_tramline.config import TramlineSettings

logger = logging.getLogger(__name__)


class UnknownWorkflowError(KeyError):
    pass


class DuplicateWorkflowError(ValueError):
    pass


class WorkflowRegistry:
    """Tramline definitions keyed by workflow name.

    Callers look a definition up per request and hand it to the engine; the
    registry never changes a definition once it is registered.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, TramlineDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[TramlineDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def names(self) -> list[str]:
        return sorted(self._definitions)

    def register(self, definition: TramlineDefinition, *, replace: bool = False) -> None:
        name = definition.name
        if not name:
            raise WorkflowDefinitionError("Cannot register a workflow without a name")
        if name in self._definitions and not replace:
            raise DuplicateWorkflowError(f"Workflow already registered: {name}")
        self._definitions[name] = definition
        logger.debug(
            "Registered tramline definition",
            extra={"workflow": name, "critical_path_length": len(definition.critical_path)},
        )

    def get(self, name: str) -> TramlineDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownWorkflowError(name) from None

    def load_json(self, path: Path, *, replace: bool = False) -> list[TramlineDefinition]:
        """Register the definitions held in a JSON file.

        The file holds either one definition object or a list of them.
        """

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise WorkflowDefinitionError(f"Invalid JSON in {path}: {e}") from e

        items = raw if isinstance(raw, list) else [raw]
        loaded: list[TramlineDefinition] = []
        for item in items:
            if not isinstance(item, Mapping):
                raise WorkflowDefinitionError(f"Expected a definition object in {path}")
            definition = TramlineDefinition.from_json(item)
            self.register(definition, replace=replace)
            loaded.append(definition)

        logger.info(
            "Loaded tramline definitions",
            extra={"path": str(path), "workflows": [d.name for d in loaded]},
        )
        return loaded

    @classmethod
    def default(cls) -> WorkflowRegistry:
        registry = cls()
        registry.register(PMC_TRAMLINE)
        return registry

    @classmethod
    def from_settings(cls, settings: TramlineSettings) -> WorkflowRegistry:
        registry = cls.default()
        if settings.workflows_path is not None:
            registry.load_json(settings.workflows_path, replace=True)
        return registry
