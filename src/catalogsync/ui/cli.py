from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from prometheus_client import CollectorRegistry

from catalogsync.adapters.metrics import LoggingMetricsSink, PrometheusMetricsSink
from catalogsync.app import apply_catalog_definitions, set_protocol_version_range
from catalogsync.config import (
    ConfigurationError,
    configure_logging,
    get_metrics_export_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from catalogsync.domain.ports import MetricsSink

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile connector definitions")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data dir)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Apply a connector catalog")
    apply.add_argument(
        "--catalog",
        type=str,
        help="Path to the registry JSON file (defaults to CATALOGSYNC_CATALOG_PATH)",
    )
    apply.add_argument(
        "--force-update-all",
        action="store_true",
        default=None,
        help="Move default versions even for definitions that are in use",
    )
    apply.add_argument(
        "--metrics",
        choices=("log", "prometheus"),
        default="log",
        help="Where to send outcome counters (default: %(default)s)",
    )
    apply.add_argument(
        "--metrics-textfile",
        type=str,
        help="Textfile-collector file for prometheus counters "
        "(defaults to CATALOGSYNC_METRICS_TEXTFILE)",
    )
    apply.add_argument(
        "--pushgateway-url",
        type=str,
        help="Pushgateway for prometheus counters (defaults to CATALOGSYNC_PUSHGATEWAY_URL)",
    )

    protocol_range = subparsers.add_parser(
        "protocol-range",
        help="Store the supported protocol version range",
    )
    protocol_range.add_argument("--min", dest="min_version", type=str, required=True)
    protocol_range.add_argument("--max", dest="max_version", type=str, required=True)

    return parser.parse_args(list(argv))


def _build_metrics(args: argparse.Namespace) -> MetricsSink:
    if args.metrics == "prometheus":
        export_config = get_metrics_export_config(
            textfile_path=args.metrics_textfile,
            pushgateway_url=args.pushgateway_url,
        )
        return PrometheusMetricsSink(CollectorRegistry(), export_config=export_config)
    if args.metrics == "log":
        return LoggingMetricsSink()
    raise ValueError(f"Unsupported metrics sink: {args.metrics}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        metrics = _build_metrics(parsed_args) if parsed_args.command == "apply" else None
    except (ConfigurationError, ValueError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "apply":
            result = apply_catalog_definitions(
                catalog_path=parsed_args.catalog,
                metrics=metrics,
                force_update_all=parsed_args.force_update_all,
                database_uri=parsed_args.database_uri,
            )
            if isinstance(metrics, PrometheusMetricsSink):
                metrics.export()
            log.info(
                "Reconciliation finished: processed=%s, succeeded=%s, failed=%s",
                len(result.outcomes),
                result.succeeded,
                result.failed,
            )
        elif parsed_args.command == "protocol-range":
            set_protocol_version_range(
                parsed_args.min_version,
                parsed_args.max_version,
                database_uri=parsed_args.database_uri,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ConfigurationError, ValueError):
        log.exception("Invalid configuration or input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
