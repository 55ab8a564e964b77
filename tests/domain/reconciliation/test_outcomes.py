from __future__ import annotations

import logging

import pytest

from catalogsync.domain.reconciliation import (
    OutcomeKind,
    OutcomeRecorder,
    OutcomeStatus,
    ReconciliationOutcome,
    ReconciliationResult,
)
from tests.helpers.definitions import RecordingMetricsSink, make_entry


@pytest.mark.parametrize(
    ("kind", "status"),
    [
        (OutcomeKind.INITIAL_VERSION_ADDED, OutcomeStatus.OK),
        (OutcomeKind.DEFAULT_VERSION_UPDATED, OutcomeStatus.OK),
        (OutcomeKind.VERSION_UNCHANGED, OutcomeStatus.OK),
        (OutcomeKind.INCOMPATIBLE_PROTOCOL_VERSION, OutcomeStatus.FAILED),
        (OutcomeKind.DEFINITION_CONVERSION_FAILED, OutcomeStatus.FAILED),
        (OutcomeKind.DEFINITION_WRITE_FAILED, OutcomeStatus.FAILED),
    ],
)
def test_outcome_kind_status(kind: OutcomeKind, status: OutcomeStatus) -> None:
    assert kind.status is status


def test_recorder_emits_one_counter_with_entry_attributes() -> None:
    sink = RecordingMetricsSink()
    recorder = OutcomeRecorder(sink)
    entry = make_entry("0.1.0", docker_repository="airbyte/source-faker")

    recorder.record(ReconciliationOutcome.for_entry(entry, OutcomeKind.INITIAL_VERSION_ADDED))

    assert sink.events == [
        (
            "connector_registry_definition_processed",
            1,
            {
                "status": "ok",
                "outcome": "initial_version_added",
                "docker_repository": "airbyte/source-faker",
                "docker_image_tag": "0.1.0",
            },
        )
    ]


def test_recorder_logs_failures_as_warnings(caplog: pytest.LogCaptureFixture) -> None:
    sink = RecordingMetricsSink()
    recorder = OutcomeRecorder(sink, metric_name="custom_metric")
    outcome = ReconciliationOutcome.for_entry(
        make_entry("bad"),
        OutcomeKind.DEFINITION_CONVERSION_FAILED,
        reason="not semver",
    )

    with caplog.at_level(logging.INFO):
        recorder.record(outcome)

    assert sink.events[0][0] == "custom_metric"
    assert sink.events[0][2]["status"] == "failed"
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "not semver" in warnings[0].getMessage()


def test_result_counts_and_totals() -> None:
    result = ReconciliationResult()
    for kind in (
        OutcomeKind.INITIAL_VERSION_ADDED,
        OutcomeKind.INITIAL_VERSION_ADDED,
        OutcomeKind.INCOMPATIBLE_PROTOCOL_VERSION,
    ):
        result.add(ReconciliationOutcome.for_entry(make_entry(), kind))

    assert result.counts[OutcomeKind.INITIAL_VERSION_ADDED] == 2
    assert result.counts[OutcomeKind.INCOMPATIBLE_PROTOCOL_VERSION] == 1
    assert result.succeeded == 2
    assert result.failed == 1
