#!/usr/bin/env python3
"""Programmatic tramline example.

This demonstrates using the engine components directly:

* load settings from `.env`
* look up a tramline definition in the workflow registry
* build and decorate the tramline for one deposit, then print it as JSON

Activities are read from a JSON file holding a list of `{status, date}`
records in ascending time order.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from pmc_tramline.config import TramlineSettings
from pmc_tramline.logging import configure_logging
from pmc_tramline.tramline import build_status_tramline
from pmc_tramline.workflow import UnknownWorkflowError, WorkflowRegistry


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the tramline for one deposit.")
    parser.add_argument("--status", default=None, help="Current deposit status (optional)")
    parser.add_argument("--activities", type=Path, default=None, help="JSON activity log")
    parser.add_argument("--metadata", type=Path, default=None, help="JSON metadata document")
    parser.add_argument("--workflow", default=None, help="Registered workflow name")
    parser.add_argument("--last-modified", default=None, help="Fallback ISO timestamp")
    return parser.parse_args(argv)


def _read_json(path: Path | None) -> object:
    if path is None:
        return None
    return json.loads(path.read_text(encoding="utf-8"))


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = TramlineSettings()
    configure_logging(settings.log_level, json_output=settings.json_logs)

    registry = WorkflowRegistry.from_settings(settings)
    try:
        definition = registry.get(args.workflow or settings.default_workflow)
    except UnknownWorkflowError as exc:
        print(f"Unknown workflow: {exc}. Registered: {', '.join(registry.names())}")
        return 1

    activities = _read_json(args.activities) or []
    result = build_status_tramline(
        definition,
        args.status,
        activities if isinstance(activities, list) else [],
        fallback_timestamp=args.last_modified,
        metadata=_read_json(args.metadata),
    )

    print(json.dumps(result.to_json(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
