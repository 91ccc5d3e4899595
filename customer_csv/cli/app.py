from __future__ import annotations

import argparse
import asyncio
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from customer_csv.config.loader import DEFAULT_CONFIG_PATH, AppConfig, ConfigError, load_config
from customer_csv.csvfile.reader import preview_file
from customer_csv.logging.error_log import LOGS_DIR, ErrorSink, default_log_path
from customer_csv.logging.init import log_summary, set_debug, setup_logging
from customer_csv.models.processing_result import FileStatus, ProcessingResult
from customer_csv.parsing.factory import ParserFactory
from customer_csv.services.orchestrator import ProcessingError, process_all
from customer_csv.services.summary import records_to_frame, render_error_breakdown, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (python-dotenv) and config/sources.yml
- Parse every configured source with the shared error sink
- Print record tables, the error report, per-kind counts and the SUMMARY line

Exit codes: 0 = no errors recorded, 2 = errors recorded, 1 = fatal
(config / directory / unknown format).
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

ENV_DISABLE_LOOKUP = "DISABLE_PHONE_LOOKUP"
ENV_LOOKUP_DELAY_MS = "PHONE_LOOKUP_DELAY_MS"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv; a missing file is not an error."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Multi-format customer CSV parser")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print source headers & first rows then exit")
    p.add_argument("--error-log", action="store_true", help="Write recorded errors as JSON Lines under the log directory")
    return p.parse_args(argv)


def _apply_env_overrides(cfg: AppConfig, logger) -> AppConfig:
    enrichment = cfg.enrichment
    if os.getenv(ENV_DISABLE_LOOKUP) == "1":
        logger.debug(f"phone lookup disabled via {ENV_DISABLE_LOOKUP}=1")
        enrichment = replace(enrichment, enabled=False)
    delay = os.getenv(ENV_LOOKUP_DELAY_MS)
    if delay:
        try:
            delay_ms = int(delay)
        except ValueError:
            logger.warning(f"ignoring {ENV_LOOKUP_DELAY_MS}={delay!r}: not an integer")
        else:
            if delay_ms < 0:
                logger.warning(f"ignoring {ENV_LOOKUP_DELAY_MS}={delay_ms}: must be >= 0")
            else:
                enrichment = replace(enrichment, delay_ms=delay_ms)
    return replace(cfg, enrichment=enrichment)


def _inspect_data(cfg: AppConfig) -> int:
    for source in cfg.sources:
        path = cfg.source_path(source)
        print(f"FILE: {source.file} format={source.format}")
        try:
            preview = preview_file(path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  columns={preview.columns} lines={preview.total_lines}")
        print("  sample_rows=", preview.rows)
    return EXIT_SUCCESS_ALL


def _print_results(result: ProcessingResult, logger) -> None:
    for stat in result.file_stats:
        print(f"--- {stat.file_name} ({stat.format_tag}) ---")
        records = result.records.get(stat.file_name, [])
        if records:
            print(records_to_frame(records).to_string(index=False))
        else:
            print("(no records)")
        if stat.status is not FileStatus.SUCCESS:
            logger.warning(
                f"{stat.file_name}: {stat.status.value}, {stat.errors} error(s), {stat.records} record(s) accepted"
            )


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] を渡されたときに sys.argv (pytest の引数) を読まない
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(DEFAULT_CONFIG_PATH)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.is_dir():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    cfg = _apply_env_overrides(cfg, logger)
    logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg)

    factory = ParserFactory()
    logger.info(f"Supported formats: {', '.join(factory.supported_types())}")

    sink = ErrorSink()
    try:
        result = asyncio.run(process_all(cfg, sink=sink, factory=factory))
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    _print_results(result, logger)

    print(sink.report())
    for line in render_error_breakdown(sink.summary()):
        logger.info(line)

    if args.error_log and sink.has_errors():
        logs_dir = Path(cfg.error_log_directory) if cfg.error_log_directory else LOGS_DIR
        path = sink.export_json_lines(default_log_path(logs_dir))
        logger.info(f"error log written: {path}")

    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    if sink.has_errors():
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
