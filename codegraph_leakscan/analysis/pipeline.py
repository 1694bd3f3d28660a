"""
Leak Scan Pipeline

    discover -> parse once (arena) -> entity catalog
             -> boundary scan  |  shape scan   (concurrent, read-only inputs)
             -> aggregate

The catalog must be complete before either scan starts. The two scans
share nothing mutable, so they run as independent tasks and their results
are merged here on a single thread.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from codegraph_leakscan.analysis.base import ScanResult
from codegraph_leakscan.analysis.boundary_scanner import BoundaryScanner
from codegraph_leakscan.analysis.entity_catalog import EntityCatalogBuilder
from codegraph_leakscan.analysis.report import LeakReport, aggregate, write_report
from codegraph_leakscan.analysis.shape_scanner import ShapeScanner
from codegraph_leakscan.analysis.type_leak_walker import TypeLeakWalker
from codegraph_leakscan.analysis.type_resolver import TypeResolver
from codegraph_leakscan.config import LeakScanSettings
from codegraph_leakscan.domain.module_classifier import ModuleClassifier
from codegraph_leakscan.exceptions import SourceRootNotFoundError
from codegraph_leakscan.infra.logging import get_logger
from codegraph_leakscan.parsing.arena import ParsedArena, parse_source_tree
from codegraph_leakscan.parsing.file_discovery import discover_java_files
from codegraph_leakscan.parsing.java_extractor import JavaDeclarationExtractor

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScanStatistics:
    """Console-facing counters; not part of the report."""

    files_discovered: int = 0
    files_analyzed: int = 0
    files_skipped: int = 0
    skipped_by_reason: dict[str, int] = field(default_factory=dict)
    entity_classes: int = 0
    controllers: int = 0
    endpoints: int = 0
    dto_classes: int = 0
    dto_members: int = 0
    duration_seconds: float = 0.0


@dataclass(frozen=True)
class ScanRun:
    """Result of one pipeline run."""

    report: LeakReport
    statistics: ScanStatistics


class LeakScanPipeline:
    """Runs a full scan of one source tree."""

    def __init__(self, settings: LeakScanSettings, extractor: JavaDeclarationExtractor | None = None):
        self.settings = settings
        self.classifier = ModuleClassifier(settings.module_rules)
        self._extractor = extractor

    def run(self, source_root: Path | None = None) -> ScanRun:
        """
        Scan a source tree.

        Args:
            source_root: Overrides settings.source_root

        Returns:
            ScanRun with the report and statistics

        Raises:
            SourceRootNotFoundError: If the source root does not exist
        """
        start = time.perf_counter()
        source_root = source_root or self.settings.source_root
        if not source_root.is_dir():
            raise SourceRootNotFoundError(str(source_root.absolute()))

        files = discover_java_files(source_root)
        logger.info("scan_started", source_root=str(source_root), files=len(files))

        arena = parse_source_tree(
            source_root,
            files,
            workers=self.settings.workers,
            extractor=self._extractor or JavaDeclarationExtractor(),
        )
        return self.run_arena(arena, started_at=start)

    def run_arena(self, arena: ParsedArena, started_at: float | None = None) -> ScanRun:
        """
        Analyze an already parsed source tree.

        Args:
            arena: Parse outcomes in enumeration order
            started_at: perf_counter() value the duration is measured from

        Returns:
            ScanRun
        """
        start = started_at if started_at is not None else time.perf_counter()
        parsed_files = arena.files

        # Phase 1: entity catalog
        catalog = EntityCatalogBuilder().build(parsed_files)

        walker = TypeLeakWalker(TypeResolver(catalog, self.settings.assume_local_namespace))
        boundary = BoundaryScanner(walker, self.classifier)
        shape = ShapeScanner(walker, self.classifier)

        # Phase 2 + 3: independent scans over the same read-only inputs
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="leakscan-scan") as executor:
            boundary_future = executor.submit(boundary.scan, parsed_files)
            shape_future = executor.submit(shape.scan, parsed_files)
            boundary_result: ScanResult = boundary_future.result()
            shape_result: ScanResult = shape_future.result()

        logger.info(
            "boundary_scan_completed",
            controllers=boundary_result.declarations,
            endpoints=boundary_result.members,
            findings=len(boundary_result.findings),
        )
        logger.info(
            "shape_scan_completed",
            dto_classes=shape_result.declarations,
            members=shape_result.members,
            findings=len(shape_result.findings),
        )

        # Phase 4: aggregate
        report = aggregate(boundary_result.findings, shape_result.findings, self.classifier.known_modules)

        statistics = ScanStatistics(
            files_discovered=len(arena.outcomes),
            files_analyzed=len(parsed_files),
            files_skipped=len(arena.failures),
            skipped_by_reason=arena.failure_counts(),
            entity_classes=len(catalog),
            controllers=boundary_result.declarations,
            endpoints=boundary_result.members,
            dto_classes=shape_result.declarations,
            dto_members=shape_result.members,
            duration_seconds=time.perf_counter() - start,
        )
        logger.info("scan_completed", total_violations=report.totals.total, files_skipped=statistics.files_skipped)
        return ScanRun(report=report, statistics=statistics)


def run_scan(settings: LeakScanSettings, output_path: Path | None = None) -> ScanRun:
    """
    Scan settings.source_root and write the report.

    Nothing is written if the source root is missing.

    Args:
        settings: Scan settings
        output_path: Overrides settings.output_file

    Returns:
        ScanRun

    Raises:
        SourceRootNotFoundError: If the source root does not exist
    """
    result = LeakScanPipeline(settings).run()
    write_report(result.report, output_path or settings.output_file)
    return result
