"""
codegraph-leakscan

Static analysis of Java/Spring sources for persistence entities that leak
through REST endpoint signatures and DTO shapes.
"""

__version__ = "0.1.0"

from codegraph_leakscan.analysis.pipeline import LeakScanPipeline, ScanRun, run_scan
from codegraph_leakscan.config import LeakScanSettings

__all__ = ["__version__", "LeakScanPipeline", "LeakScanSettings", "ScanRun", "run_scan"]
