"""
Analysis Layer

Entity catalog, type resolution, type-leak walking, the boundary and shape
scanners, report aggregation and the pipeline tying them together.
"""

from codegraph_leakscan.analysis.base import ScanResult, Scanner
from codegraph_leakscan.analysis.boundary_scanner import BoundaryScanner, endpoint_mapping
from codegraph_leakscan.analysis.endpoints import annotation_path, combine_paths
from codegraph_leakscan.analysis.entity_catalog import EntityCatalogBuilder
from codegraph_leakscan.analysis.pipeline import LeakScanPipeline, ScanRun, ScanStatistics, run_scan
from codegraph_leakscan.analysis.report import (
    FieldLeakDetail,
    InputLeakDetail,
    LeakReport,
    ModuleReport,
    ReturnLeakDetail,
    ThresholdReport,
    ViolationCounts,
    aggregate,
    write_report,
)
from codegraph_leakscan.analysis.shape_scanner import ShapeScanner, is_dto_name
from codegraph_leakscan.analysis.thresholds import parse_thresholds, read_thresholds
from codegraph_leakscan.analysis.type_leak_walker import TypeLeakWalker, find_sensitive
from codegraph_leakscan.analysis.type_resolver import TypeResolver

__all__ = [
    # Core engine
    "TypeResolver",
    "TypeLeakWalker",
    "find_sensitive",
    "EntityCatalogBuilder",
    # Scanners
    "Scanner",
    "ScanResult",
    "BoundaryScanner",
    "endpoint_mapping",
    "annotation_path",
    "combine_paths",
    "ShapeScanner",
    "is_dto_name",
    # Report
    "aggregate",
    "write_report",
    "LeakReport",
    "ModuleReport",
    "ReturnLeakDetail",
    "InputLeakDetail",
    "FieldLeakDetail",
    "ViolationCounts",
    "ThresholdReport",
    "parse_thresholds",
    "read_thresholds",
    # Pipeline
    "LeakScanPipeline",
    "ScanRun",
    "ScanStatistics",
    "run_scan",
]
