"""Metrics sink adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    push_to_gateway,
    write_to_textfile,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from catalogsync.config import MetricsExportConfig

log = getLogger(__name__)


class PrometheusMetricsSink:
    """Expose counts as Prometheus counters on ``registry``.

    The first call for a metric name fixes its label names; later calls for the
    same name must carry the same attribute keys. ``export`` hands the registry
    to the targets in ``export_config``.
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        *,
        export_config: MetricsExportConfig | None = None,
    ) -> None:
        self.registry = REGISTRY if registry is None else registry
        self.export_config = export_config
        self._counters: dict[str, Counter] = {}

    def count(self, name: str, value: int, *, attributes: Mapping[str, str]) -> None:
        counter = self._counters.get(name)
        if counter is None:
            counter = Counter(
                name,
                f"Count of {name.replace('_', ' ')} events",
                labelnames=sorted(attributes),
                registry=self.registry,
            )
            self._counters[name] = counter
        if attributes:
            counter.labels(**attributes).inc(value)
        else:
            counter.inc(value)

    def export(self) -> None:
        config = self.export_config
        if config is None:
            log.debug("No Prometheus export target configured; counters stay in-process")
            return
        if config.textfile_path is not None:
            write_to_textfile(str(config.textfile_path), self.registry)
            log.info("Wrote Prometheus metrics to %s", config.textfile_path)
        if config.pushgateway_url is not None:
            push_to_gateway(config.pushgateway_url, job=config.job, registry=self.registry)
            log.info(
                "Pushed Prometheus metrics to %s (job=%s)", config.pushgateway_url, config.job
            )


class LoggingMetricsSink:
    """Write each count to the log instead of an exporter."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._log = getLogger(logger_name) if logger_name else log

    def count(self, name: str, value: int, *, attributes: Mapping[str, str]) -> None:
        rendered = ", ".join(f"{key}={attributes[key]}" for key in sorted(attributes))
        self._log.info("metric %s +%s {%s}", name, value, rendered)


if TYPE_CHECKING:
    from catalogsync.domain.ports import MetricsSink

    _prometheus_check: MetricsSink = PrometheusMetricsSink()
    _logging_check: MetricsSink = LoggingMetricsSink()
