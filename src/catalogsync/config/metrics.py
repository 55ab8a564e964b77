"""Prometheus export configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import MissingConfigurationError

METRICS_TEXTFILE_ENV: Final[str] = "CATALOGSYNC_METRICS_TEXTFILE"
PUSHGATEWAY_URL_ENV: Final[str] = "CATALOGSYNC_PUSHGATEWAY_URL"
PUSHGATEWAY_JOB_ENV: Final[str] = "CATALOGSYNC_PUSHGATEWAY_JOB"
DEFAULT_PUSHGATEWAY_JOB: Final[str] = "catalogsync"


@dataclass(frozen=True, slots=True)
class MetricsExportConfig:
    """Where counters go once a run has finished.

    ``textfile_path`` targets the node exporter textfile collector;
    ``pushgateway_url`` a Prometheus Pushgateway. Both may be set.
    """

    textfile_path: Path | None = None
    pushgateway_url: str | None = None
    job: str = DEFAULT_PUSHGATEWAY_JOB


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def get_metrics_export_config(
    *,
    textfile_path: str | Path | None = None,
    pushgateway_url: str | None = None,
) -> MetricsExportConfig:
    """Resolve export targets from arguments first, then the environment.

    Raises ``MissingConfigurationError`` when neither target is configured.
    """

    textfile = textfile_path if textfile_path is not None else _env(METRICS_TEXTFILE_ENV)
    gateway = pushgateway_url or _env(PUSHGATEWAY_URL_ENV)
    if textfile is None and gateway is None:
        raise MissingConfigurationError(
            "Prometheus metrics need an export target: set "
            f"{METRICS_TEXTFILE_ENV} or {PUSHGATEWAY_URL_ENV}"
        )
    return MetricsExportConfig(
        textfile_path=Path(textfile).expanduser() if textfile is not None else None,
        pushgateway_url=gateway,
        job=_env(PUSHGATEWAY_JOB_ENV) or DEFAULT_PUSHGATEWAY_JOB,
    )
