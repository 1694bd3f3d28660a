"""
Threshold Reader

Reads the maximum allowed violation counts that per-module architecture
tests declare, e.g. in `ExamEntityUsageArchitectureTest.java`:

    @Override
    protected int getMaxEntityReturnViolations() {
        return 12;
    }

This is much faster than a full scan but yields counts only.
"""

import re
from pathlib import Path

from codegraph_leakscan.analysis.report import ThresholdReport, ViolationCounts
from codegraph_leakscan.infra.logging import get_logger

logger = get_logger(__name__)

TEST_FILE_SUFFIX = "EntityUsageArchitectureTest.java"
IGNORED_MODULES = frozenset({"abstractmodule", "incoming"})

_CLASS_NAME = re.compile(r"class\s+(\w+)EntityUsageArchitectureTest")
_RETURN_MAX = re.compile(r"getMaxEntityReturnViolations\s*\(\s*\)\s*\{[^}]*return\s+(\d+)")
_INPUT_MAX = re.compile(r"getMaxEntityInputViolations\s*\(\s*\)\s*\{[^}]*return\s+(\d+)")
_FIELD_MAX = re.compile(r"getMaxDtoEntityFieldViolations\s*\(\s*\)\s*\{[^}]*return\s+(\d+)")


def parse_thresholds(content: str) -> tuple[str, ViolationCounts] | None:
    """
    Parse one architecture test source.

    Args:
        content: Java source of a *EntityUsageArchitectureTest

    Returns:
        (module, counts), or None if the file declares no usable test class
    """
    class_match = _CLASS_NAME.search(content)
    if class_match is None:
        return None

    module = class_match.group(1).lower()
    if module in IGNORED_MODULES:
        return None

    return module, ViolationCounts(
        entity_return_violations=_max_of(_RETURN_MAX, content),
        entity_input_violations=_max_of(_INPUT_MAX, content),
        dto_entity_field_violations=_max_of(_FIELD_MAX, content),
    )


def _max_of(pattern: re.Pattern, content: str) -> int:
    match = pattern.search(content)
    return int(match.group(1)) if match else 0


def read_thresholds(test_root: Path) -> ThresholdReport:
    """
    Collect thresholds from every architecture test below a directory.

    Args:
        test_root: Test source root; a missing directory yields an empty report

    Returns:
        ThresholdReport with modules sorted by label
    """
    modules: dict[str, ViolationCounts] = {}

    test_files = sorted(test_root.rglob(f"*{TEST_FILE_SUFFIX}")) if test_root.is_dir() else []
    logger.info("threshold_files_found", files=len(test_files), test_root=str(test_root))

    for test_file in test_files:
        try:
            content = test_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("threshold_file_unreadable", file=str(test_file), error=str(e))
            continue

        parsed = parse_thresholds(content)
        if parsed is None:
            continue
        module, counts = parsed
        modules[module] = counts
        logger.debug("module_thresholds_read", module=module, total=counts.total)

    totals = ViolationCounts()
    for counts in modules.values():
        totals = totals + counts

    return ThresholdReport(modules=dict(sorted(modules.items())), totals=totals)
