"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pmc_tramline.config import TramlineSettings

_ENV_VARS = (
    "LOG_LEVEL",
    "TRAMLINE_JSON_LOGS",
    "TRAMLINE_WORKFLOWS_PATH",
    "TRAMLINE_DEFAULT_WORKFLOW",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_settings_defaults(clean_env: Path) -> None:
    settings = TramlineSettings()

    assert settings.log_level == "INFO"
    assert settings.json_logs is True
    assert settings.workflows_path is None
    assert settings.default_workflow == "PMC_DEPOSIT"


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "LOG_LEVEL=DEBUG",
                "TRAMLINE_JSON_LOGS=false",
                "TRAMLINE_WORKFLOWS_PATH=config/workflows.json",
                "TRAMLINE_DEFAULT_WORKFLOW=TOY",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = TramlineSettings()

    assert settings.log_level == "DEBUG"
    assert settings.json_logs is False
    assert settings.workflows_path == Path("config/workflows.json")
    assert settings.default_workflow == "TOY"


def test_environment_overrides_dotenv(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (clean_env / ".env").write_text("LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert TramlineSettings().log_level == "WARNING"


def test_blank_default_workflow_is_rejected(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TRAMLINE_DEFAULT_WORKFLOW", "  ")

    with pytest.raises(ValidationError):
        TramlineSettings()
