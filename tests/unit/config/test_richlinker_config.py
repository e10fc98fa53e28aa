"""Tests for config schema validation and layered loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from richlinker.config.loader import load_config
from richlinker.config.schema import (
    AirtablePageConfig,
    Config,
    DuplicateStrategy,
    HandlersConfig,
)
from richlinker.core.errors import ConfigError


def write_config(directory: Path, data: dict | str) -> Path:
    path = directory / ".richlinker" / "config.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


class TestSchema:
    """Tests for the Pydantic models."""

    def test_defaults(self) -> None:
        config = Config()
        assert config.debug is False
        assert config.activation.window_ms == 1000
        assert config.activation.duplicate_strategy is DuplicateStrategy.CACHE
        assert config.clipboard.backend == "browser"
        assert config.clipboard.focus_retry_delay_ms == 100
        assert config.browser.cdp_endpoint == "http://localhost:9222"
        assert config.handlers.enabled is None
        assert len(config.handlers.airtable_pages) == 2
        assert config.display.preview_width == 30

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Config.model_validate({"activation": {"windowMs": 500}})

    def test_window_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Config.model_validate({"activation": {"window_ms": 0}})

    def test_strategy_from_string(self) -> None:
        config = Config.model_validate({"activation": {"duplicate_strategy": "both"}})
        assert config.activation.duplicate_strategy is DuplicateStrategy.BOTH

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Config.model_validate({"clipboard": {"backend": "x11"}})

    def test_unknown_handler_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HandlersConfig(enabled=["google_docs", "notion"])

    def test_airtable_url_must_be_https(self) -> None:
        with pytest.raises(ValidationError, match="https://"):
            AirtablePageConfig(base="crm", url="http://airtable.com/appX/pagY")


class TestLoadConfig:
    """Tests for load_config layering."""

    def test_no_files_gives_defaults(self, isolated_home: Path, tmp_path: Path) -> None:
        project = tmp_path / "project"
        project.mkdir()
        assert load_config(cwd=project) == Config()

    def test_global_layer(self, isolated_home: Path, tmp_path: Path) -> None:
        write_config(isolated_home, {"debug": True})
        assert load_config(cwd=tmp_path).debug is True

    def test_local_overrides_global(self, isolated_home: Path, tmp_path: Path) -> None:
        project = tmp_path / "project"
        write_config(isolated_home, {"activation": {"window_ms": 2000, "duplicate_strategy": "both"}})
        write_config(project, {"activation": {"window_ms": 500}})

        config = load_config(cwd=project)

        assert config.activation.window_ms == 500
        assert config.activation.duplicate_strategy is DuplicateStrategy.BOTH

    def test_local_list_replaces_global(self, isolated_home: Path, tmp_path: Path) -> None:
        project = tmp_path / "project"
        write_config(isolated_home, {"handlers": {"enabled": ["github", "confluence"]}})
        write_config(project, {"handlers": {"airtable_pages": []}})
        config = load_config(cwd=project)
        assert config.handlers.enabled == ["github", "confluence"]
        assert config.handlers.airtable_pages == []

    def test_invalid_json(self, isolated_home: Path, tmp_path: Path) -> None:
        write_config(isolated_home, "{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(cwd=tmp_path)

    def test_validation_error_names_sources(self, isolated_home: Path, tmp_path: Path) -> None:
        path = write_config(isolated_home, {"activation": {"window_ms": -1}})
        with pytest.raises(ConfigError, match="Config validation failed") as exc_info:
            load_config(cwd=tmp_path)
        assert str(path) in exc_info.value.message

    def test_home_as_cwd_loads_once(self, isolated_home: Path) -> None:
        write_config(isolated_home, {"debug": True})
        assert load_config(cwd=isolated_home).debug is True

    def test_explicit_path(self, isolated_home: Path, tmp_path: Path) -> None:
        write_config(isolated_home, {"debug": True})
        explicit = tmp_path / "custom.json"
        explicit.write_text(json.dumps({"display": {"preview_width": 12}}))

        config = load_config(explicit)

        assert config.display.preview_width == 12
        assert config.debug is False

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config not found"):
            load_config(tmp_path / "missing.json")

    def test_explicit_path_not_object(self, tmp_path: Path) -> None:
        explicit = tmp_path / "custom.json"
        explicit.write_text("[]")
        with pytest.raises(ConfigError, match="Expected an object"):
            load_config(explicit)
