"""
File Discovery

Enumerates Java sources below a root. Sorted, so every run (and every
pass) sees files in the same order.
"""

from pathlib import Path

EXCLUDED_DIRS = frozenset({".git", ".gradle", ".idea", "build", "out", "target", "node_modules"})


def discover_java_files(source_root: Path, excluded_dirs: frozenset[str] = EXCLUDED_DIRS) -> list[Path]:
    """
    Discover Java source files.

    Args:
        source_root: Directory to walk recursively
        excluded_dirs: Directory names skipped anywhere below the root

    Returns:
        Sorted list of file paths
    """
    discovered = []
    for file_path in source_root.rglob("*.java"):
        if not file_path.is_file():
            continue
        relative_parts = file_path.relative_to(source_root).parts[:-1]
        if any(part in excluded_dirs for part in relative_parts):
            continue
        discovered.append(file_path)
    return sorted(discovered)
