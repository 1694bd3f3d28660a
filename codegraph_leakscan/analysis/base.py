"""
Scanner base

Scanners look at one parsed file at a time and merge per-file results in
enumeration order, so results do not depend on how files were parsed.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field

from codegraph_leakscan.analysis.type_leak_walker import TypeLeakWalker
from codegraph_leakscan.domain.declarations import ParsedFile
from codegraph_leakscan.domain.module_classifier import ModuleClassifier
from codegraph_leakscan.domain.violations import Finding


@dataclass(frozen=True)
class ScanResult:
    """
    Output of one scanning pass.

    Attributes:
        findings: Module-attributed violations in discovery order
        declarations: Declarations inspected (controllers or DTOs)
        members: Members inspected (endpoints or fields/components)
    """

    findings: tuple[Finding, ...] = ()
    declarations: int = 0
    members: int = 0


@dataclass
class FileScan:
    """Mutable per-file accumulator; never shared between files."""

    findings: list[Finding] = field(default_factory=list)
    declarations: int = 0
    members: int = 0


class Scanner(ABC):
    """Base class for passes that run the type-leak walker over declarations."""

    def __init__(self, walker: TypeLeakWalker, classifier: ModuleClassifier):
        self.walker = walker
        self.classifier = classifier

    def scan(self, files: Iterable[ParsedFile]) -> ScanResult:
        """
        Scan parsed files.

        Args:
            files: Parsed files in enumeration order

        Returns:
            ScanResult with findings merged in file order
        """
        findings: list[Finding] = []
        declarations = members = 0
        for parsed in files:
            file_scan = FileScan()
            self.scan_file(parsed, file_scan)
            findings.extend(file_scan.findings)
            declarations += file_scan.declarations
            members += file_scan.members
        return ScanResult(findings=tuple(findings), declarations=declarations, members=members)

    @abstractmethod
    def scan_file(self, parsed: ParsedFile, out: FileScan) -> None:
        """Scan one file, appending to `out`."""

    def sensitive_in(self, parsed: ParsedFile, expr) -> list[str]:
        """Entities reachable from a declared type, sorted for stable output."""
        return sorted(self.walker.find_sensitive(expr, parsed.import_table, parsed.package))
