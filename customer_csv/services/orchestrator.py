from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import AppConfig, EnrichmentConfig, SourceConfig
from ..logging.error_log import ErrorSink
from ..models.customer_record import CustomerRecord
from ..models.error_record import FILE_LEVEL_ROW
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..parsing.factory import ParserFactory, UnsupportedFormatError
from ..transformation.customer_transformer import CustomerTransformer
from ..transformation.phone_lookup import SimulatedPhoneLookup
from ..validation.customer_validator import CustomerValidator
from .progress import ProgressTracker

"""Run orchestration over every configured CSV source.

Sources are parsed one after another with a single shared ErrorSink, so the
final report covers the whole run. Per source a FileStat is produced; the
aggregate becomes the ProcessingResult behind the SUMMARY line.
"""

__all__ = [
    "ProcessingError",
    "MSG_FILE_NOT_FOUND",
    "build_transformer",
    "process_source",
    "process_all",
]

logger = logging.getLogger(__name__)

MSG_FILE_NOT_FOUND = "File not found: {name}"


class ProcessingError(Exception):
    """Fatal error preventing the run (bad source directory, unknown format tag)."""
    pass


def build_transformer(enrichment: EnrichmentConfig) -> CustomerTransformer:
    if not enrichment.enabled:
        return CustomerTransformer()
    lookup = SimulatedPhoneLookup(delay_seconds=enrichment.delay_seconds, prefix=enrichment.phone_prefix)
    return CustomerTransformer(lookup)


def _check_directory(directory: Path) -> None:
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")


async def process_source(
    path: Path,
    source: SourceConfig,
    factory: ParserFactory,
    validator: CustomerValidator,
    transformer: CustomerTransformer,
    sink: ErrorSink,
) -> tuple[FileStat, list[CustomerRecord]]:
    """Parse one source; errors go to ``sink`` and are counted into the FileStat."""
    started = time.perf_counter()
    errors_before = sink.error_count()
    try:
        parser = factory.create_parser(source.format, validator, transformer, sink)
    except UnsupportedFormatError as e:
        raise ProcessingError(f"{source.file}: {e}") from e

    structure_valid = True
    records: list[CustomerRecord] = []
    if not path.is_file():
        logger.warning(f"file not found: {path}")
        sink.record_parsing(FILE_LEVEL_ROW, None, MSG_FILE_NOT_FOUND.format(name=path.name))
        structure_valid = False
    else:
        records = await parser.parse(path)
        structure_valid = bool(parser.structure_valid)

    errors = sink.error_count() - errors_before
    stat = FileStat(
        file_name=source.label or source.file,
        format_tag=source.format,
        status=FileStatus.classify(len(records), errors),
        records=len(records),
        errors=errors,
        elapsed_seconds=time.perf_counter() - started,
        structure_valid=structure_valid,
    )
    return stat, records


async def process_all(
    config: AppConfig,
    sink: ErrorSink | None = None,
    transformer: CustomerTransformer | None = None,
    factory: ParserFactory | None = None,
) -> ProcessingResult:
    """Parse every configured source and aggregate the results.

    Args:
        config: Loaded application config
        sink: Error sink shared by all parsers (new one when omitted)
        transformer: Transformer to use (built from ``config.enrichment`` when omitted)
        factory: Parser factory (built-in formats when omitted)

    Returns:
        ProcessingResult with per-file stats and accepted records keyed by file name

    Raises:
        ProcessingError: Source directory missing, or a source names an unknown format
    """
    start_time = datetime.now(UTC)
    started = time.perf_counter()

    sink = sink if sink is not None else ErrorSink()
    transformer = transformer if transformer is not None else build_transformer(config.enrichment)
    factory = factory if factory is not None else ParserFactory()
    validator = CustomerValidator()

    directory = Path(config.source_directory)
    _check_directory(directory)

    file_stats: list[FileStat] = []
    records_by_file: dict[str, list[CustomerRecord]] = {}
    with ProgressTracker(len(config.sources)) as progress:
        for source in config.sources:
            path = config.source_path(source)
            progress.start_file(source.file)
            stat, records = await process_source(path, source, factory, validator, transformer, sink)
            progress.finish_file(records=stat.records, errors=stat.errors)
            file_stats.append(stat)
            records_by_file[stat.file_name] = records
            logger.info(
                f"file={stat.file_name} format={stat.format_tag} status={stat.status.value} "
                f"records={stat.records} errors={stat.errors}"
            )

    end_time = datetime.now(UTC)
    elapsed = time.perf_counter() - started
    total_records = sum(s.records for s in file_stats)
    throughput = total_records / elapsed if elapsed > 0 else 0.0

    return ProcessingResult(
        success_files=sum(1 for s in file_stats if s.status is FileStatus.SUCCESS),
        partial_files=sum(1 for s in file_stats if s.status is FileStatus.PARTIAL),
        failed_files=sum(1 for s in file_stats if s.status is FileStatus.FAILED),
        total_records=total_records,
        total_errors=sum(s.errors for s in file_stats),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
        records=records_by_file,
    )
