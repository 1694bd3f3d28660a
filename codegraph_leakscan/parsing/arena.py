"""
Parsed-File Arena

Every file is read and parsed exactly once; the resulting declaration
trees are shared by all analysis passes. Per-file failures are values,
never exceptions, so one broken file cannot stop the run.
"""

from collections import Counter
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from codegraph_leakscan.domain.declarations import ParsedFile
from codegraph_leakscan.exceptions import JavaSyntaxError, ParsingError
from codegraph_leakscan.infra.logging import get_logger
from codegraph_leakscan.parsing.java_extractor import JavaDeclarationExtractor
from codegraph_leakscan.parsing.source_file import SourceFile, relative_path

logger = get_logger(__name__)


class FailureReason(str, Enum):
    """Why a file contributes nothing."""

    UNREADABLE = "unreadable"
    SYNTAX_ERROR = "syntax_error"
    UNSUPPORTED = "unsupported"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class ParseFailure:
    """A file that could not be turned into a declaration tree."""

    path: str
    reason: FailureReason
    message: str


ParseOutcome = ParsedFile | ParseFailure


@dataclass(frozen=True)
class ParsedArena:
    """
    Parse outcomes for a whole source tree, in enumeration order.

    Attributes:
        outcomes: One outcome per discovered file
    """

    outcomes: tuple[ParseOutcome, ...] = ()

    @property
    def files(self) -> tuple[ParsedFile, ...]:
        """Successfully parsed files only."""
        return tuple(o for o in self.outcomes if isinstance(o, ParsedFile))

    @property
    def failures(self) -> tuple[ParseFailure, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, ParseFailure))

    def failure_counts(self) -> dict[str, int]:
        """Failure reason -> number of files."""
        return dict(Counter(f.reason.value for f in self.failures))


def parse_file(file_path: Path, source_root: Path, extractor: JavaDeclarationExtractor) -> ParseOutcome:
    """
    Read and parse one file, absorbing every per-file failure.

    Args:
        file_path: File to parse
        source_root: Root for the reported relative path
        extractor: Declaration extractor

    Returns:
        ParsedFile, or ParseFailure describing why the file was skipped
    """
    report_path = relative_path(file_path, source_root)
    try:
        source = SourceFile.from_file(file_path, source_root)
    except (OSError, UnicodeDecodeError) as e:
        failure = ParseFailure(report_path, FailureReason.UNREADABLE, str(e))
    else:
        try:
            return extractor.extract(source)
        except JavaSyntaxError as e:
            failure = ParseFailure(report_path, FailureReason.SYNTAX_ERROR, str(e))
        except ParsingError as e:
            failure = ParseFailure(report_path, FailureReason.UNSUPPORTED, str(e))
        except RecursionError as e:
            failure = ParseFailure(report_path, FailureReason.UNSUPPORTED, f"nesting too deep: {e}")
        except Exception as e:
            # Unexpected tree shape during lowering
            failure = ParseFailure(report_path, FailureReason.INTERNAL_ERROR, f"{type(e).__name__}: {e}")

    logger.debug("file_skipped", file=failure.path, reason=failure.reason.value, error=failure.message)
    return failure


def parse_source_tree(
    source_root: Path,
    files: Sequence[Path],
    workers: int = 1,
    extractor: JavaDeclarationExtractor | None = None,
) -> ParsedArena:
    """
    Parse every file into the arena.

    Args:
        source_root: Root for reported relative paths
        files: Files in enumeration order
        workers: Parser threads; 1 parses sequentially
        extractor: Declaration extractor (default: global registry)

    Returns:
        ParsedArena with outcomes in the order of `files`
    """
    extractor = extractor or JavaDeclarationExtractor()

    if workers <= 1 or len(files) <= 1:
        outcomes = [parse_file(f, source_root, extractor) for f in files]
    else:
        # Thread-local parsers live in the registry; map() keeps input order
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="leakscan-parse") as executor:
            outcomes = list(executor.map(lambda f: parse_file(f, source_root, extractor), files))

    arena = ParsedArena(outcomes=tuple(outcomes))
    logger.info(
        "source_tree_parsed",
        files=len(arena.outcomes),
        parsed=len(arena.files),
        skipped=len(arena.failures),
        workers=workers,
    )
    return arena
