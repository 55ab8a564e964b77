from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from catalogsync.adapters.metrics import LoggingMetricsSink, PrometheusMetricsSink
from catalogsync.config import MissingConfigurationError
from catalogsync.domain.errors import SnapshotLoadError
from catalogsync.domain.reconciliation import ReconciliationResult
from catalogsync.ui import cli as cli_module

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from catalogsync.domain.ports import MetricsSink


def _capture(captured: dict[str, object]) -> Callable[..., ReconciliationResult]:
    def fake_apply(**kwargs: object) -> ReconciliationResult:
        captured.update(kwargs)
        return ReconciliationResult()

    return fake_apply


def test_apply_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "apply_catalog_definitions", _capture(captured))

    cli_module.main(["apply"])

    assert captured["catalog_path"] is None
    assert captured["force_update_all"] is None
    assert captured["database_uri"] is None
    assert isinstance(captured["metrics"], LoggingMetricsSink)


def test_apply_with_flags(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "apply_catalog_definitions", _capture(captured))

    cli_module.main(
        [
            "--verbose",
            "--database-uri",
            "sqlite:///other.db",
            "apply",
            "--catalog",
            "registry.json",
            "--force-update-all",
            "--metrics",
            "prometheus",
            "--metrics-textfile",
            str(tmp_path / "catalogsync.prom"),
        ]
    )

    assert captured["catalog_path"] == "registry.json"
    assert captured["force_update_all"] is True
    assert captured["database_uri"] == "sqlite:///other.db"
    assert isinstance(captured["metrics"], PrometheusMetricsSink)


def test_prometheus_counters_are_written_to_textfile(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    target = tmp_path / "catalogsync.prom"

    def fake_apply(*, metrics: MetricsSink, **_: object) -> ReconciliationResult:
        metrics.count(
            "connector_registry_definition_processed",
            1,
            attributes={
                "status": "ok",
                "outcome": "initial_version_added",
                "docker_repository": "airbyte/source-faker",
                "docker_image_tag": "0.1.0",
            },
        )
        return ReconciliationResult()

    monkeypatch.setattr(cli_module, "apply_catalog_definitions", fake_apply)

    cli_module.main(["apply", "--metrics", "prometheus", "--metrics-textfile", str(target)])

    payload = target.read_text(encoding="utf-8")
    (sample,) = [
        line
        for line in payload.splitlines()
        if line.startswith("connector_registry_definition_processed_total{")
    ]
    assert 'outcome="initial_version_added"' in sample
    assert 'docker_repository="airbyte/source-faker"' in sample
    assert sample.endswith(" 1.0")


def test_prometheus_without_export_target_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CATALOGSYNC_METRICS_TEXTFILE", raising=False)
    monkeypatch.delenv("CATALOGSYNC_PUSHGATEWAY_URL", raising=False)
    monkeypatch.setattr(cli_module, "apply_catalog_definitions", _capture({}))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["apply", "--metrics", "prometheus"])

    assert excinfo.value.code == 2


def test_protocol_range_command(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[tuple[str, str]] = []

    def fake_set(min_version: str, max_version: str, **_: object) -> None:
        captured.append((min_version, max_version))

    monkeypatch.setattr(cli_module, "set_protocol_version_range", fake_set)

    cli_module.main(["protocol-range", "--min", "0.2.0", "--max", "0.5.0"])

    assert captured == [("0.2.0", "0.5.0")]


def test_unknown_metrics_choice_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["apply", "--metrics", "statsd"])

    assert excinfo.value.code == 2


def test_missing_configuration_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_apply(**_: object) -> ReconciliationResult:
        raise MissingConfigurationError("Missing configuration for: CATALOGSYNC_CATALOG_PATH")

    monkeypatch.setattr(cli_module, "apply_catalog_definitions", fake_apply)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["apply"])

    assert excinfo.value.code == 2


def test_invalid_protocol_range_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "set_protocol_version_range", _reject_range)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["protocol-range", "--min", "0.5.0", "--max", "0.2.0"])

    assert excinfo.value.code == 2


def _reject_range(min_version: str, max_version: str, **_: object) -> None:
    raise ValueError(f"Protocol version range is inverted: [{min_version}, {max_version}]")


def test_fatal_error_exits_with_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_apply(**_: object) -> ReconciliationResult:
        raise SnapshotLoadError("Could not load persisted definition state")

    monkeypatch.setattr(cli_module, "apply_catalog_definitions", fake_apply)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["apply"])

    assert excinfo.value.code == 1


def test_sigint_handler_exits_cleanly() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.sigint_handler(2, None)

    assert excinfo.value.code == 0
