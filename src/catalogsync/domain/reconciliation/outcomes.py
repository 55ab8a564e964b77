"""Outcome recording: one counter event and one log line per catalog entry."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.config.reconciliation import DEFINITION_PROCESSED_METRIC

if TYPE_CHECKING:
    from catalogsync.domain.ports import MetricsSink

    from .contracts import ReconciliationOutcome

log = getLogger(__name__)


class OutcomeRecorder:
    """Forward reconciliation outcomes to a metrics sink."""

    def __init__(
        self,
        metrics: MetricsSink,
        *,
        metric_name: str = DEFINITION_PROCESSED_METRIC,
    ) -> None:
        self.metrics = metrics
        self.metric_name = metric_name

    def record(self, outcome: ReconciliationOutcome) -> None:
        if outcome.succeeded:
            log.info(
                "%s %s:%s -> %s",
                outcome.actor_type,
                outcome.docker_repository,
                outcome.docker_image_tag,
                outcome.kind,
            )
        else:
            log.warning(
                "%s %s:%s -> %s (%s)",
                outcome.actor_type,
                outcome.docker_repository,
                outcome.docker_image_tag,
                outcome.kind,
                outcome.reason,
            )
        self.metrics.count(self.metric_name, 1, attributes=metric_attributes(outcome))


def metric_attributes(outcome: ReconciliationOutcome) -> dict[str, str]:
    return {
        "status": str(outcome.status),
        "outcome": str(outcome.kind),
        "docker_repository": outcome.docker_repository,
        "docker_image_tag": outcome.docker_image_tag,
    }
