from __future__ import annotations

from pathlib import Path

import pytest

from catalogsync.config import (
    DEFINITION_PROCESSED_METRIC,
    ConfigurationError,
    MissingConfigurationError,
    env_flag,
    get_catalog_config,
    get_database_config,
    get_metrics_export_config,
    get_reconciliation_config,
    get_storage_config,
    require_env_vars,
)
from catalogsync.config.storage import DEFAULT_DB_FILENAME


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_reports_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("on", True), ("0", False), ("off", False)],
)
def test_env_flag_parses_known_values(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,
) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_flag_default_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLAG", raising=False)

    assert env_flag("EXAMPLE_FLAG", default=True) is True


def test_env_flag_rejects_unknown_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(ConfigurationError, match="EXAMPLE_FLAG"):
        env_flag("EXAMPLE_FLAG")


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("CATALOGSYNC_DATA_DIR", str(custom))

    config = get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()


def test_database_config_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_config_explicit_uri_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config(uri="sqlite:///explicit.db").uri == "sqlite:///explicit.db"


def test_database_config_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("CATALOGSYNC_DATA_DIR", str(tmp_path / "data-dir"))

    uri = get_database_config().uri

    expected_path = (tmp_path / "data-dir" / DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_catalog_config_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CATALOGSYNC_CATALOG_PATH", str(tmp_path / "registry.json"))

    assert get_catalog_config().path == tmp_path / "registry.json"


def test_catalog_config_requires_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CATALOGSYNC_CATALOG_PATH", raising=False)

    with pytest.raises(MissingConfigurationError):
        get_catalog_config()


def test_reconciliation_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CATALOGSYNC_FORCE_UPDATE_ALL", raising=False)

    config = get_reconciliation_config()

    assert config.force_update_all is False
    assert config.metric_name == DEFINITION_PROCESSED_METRIC


def test_reconciliation_config_explicit_flag_beats_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOGSYNC_FORCE_UPDATE_ALL", "true")

    assert get_reconciliation_config().force_update_all is True
    assert get_reconciliation_config(force_update_all=False).force_update_all is False


def test_metrics_export_config_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CATALOGSYNC_METRICS_TEXTFILE", str(tmp_path / "catalogsync.prom"))
    monkeypatch.setenv("CATALOGSYNC_PUSHGATEWAY_URL", "localhost:9091")
    monkeypatch.setenv("CATALOGSYNC_PUSHGATEWAY_JOB", "nightly")

    config = get_metrics_export_config()

    assert config.textfile_path == tmp_path / "catalogsync.prom"
    assert config.pushgateway_url == "localhost:9091"
    assert config.job == "nightly"


def test_metrics_export_config_explicit_target_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOGSYNC_METRICS_TEXTFILE", "/var/lib/env.prom")
    monkeypatch.delenv("CATALOGSYNC_PUSHGATEWAY_URL", raising=False)
    monkeypatch.delenv("CATALOGSYNC_PUSHGATEWAY_JOB", raising=False)

    config = get_metrics_export_config(textfile_path="/tmp/explicit.prom")

    assert config.textfile_path == Path("/tmp/explicit.prom")
    assert config.pushgateway_url is None
    assert config.job == "catalogsync"


def test_metrics_export_config_requires_a_target(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CATALOGSYNC_METRICS_TEXTFILE", raising=False)
    monkeypatch.delenv("CATALOGSYNC_PUSHGATEWAY_URL", raising=False)

    with pytest.raises(MissingConfigurationError, match="CATALOGSYNC_METRICS_TEXTFILE"):
        get_metrics_export_config()
