"""
Report Aggregator

Groups findings per module and renders the violations report:

    {
      "modules": {
        "<module>": {
          "entityReturnViolations": 1,
          "entityInputViolations": 0,
          "dtoEntityFieldViolations": 2,
          "entityReturnDetails": [...],
          "entityInputDetails": [],
          "dtoEntityFieldDetails": [...]
        }
      },
      "totals": {...}
    }

Modules are sorted; every known module is present even without findings.
"""

from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from codegraph_leakscan.domain.violations import FieldLeak, Finding, InputLeak, ReturnLeak


class _ReportModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ReturnLeakDetail(_ReportModel):
    controller: str
    method: str
    endpoint: str
    return_type: str
    entity_class: str
    file: str
    line: int

    @classmethod
    def from_violation(cls, v: ReturnLeak) -> "ReturnLeakDetail":
        return cls(
            controller=v.controller,
            method=v.method,
            endpoint=v.endpoint,
            return_type=v.return_type,
            entity_class=v.entity_class,
            file=v.file,
            line=v.line,
        )


class InputLeakDetail(_ReportModel):
    controller: str
    method: str
    endpoint: str
    parameter_name: str
    parameter_type: str
    annotation_type: str
    entity_class: str
    file: str
    line: int

    @classmethod
    def from_violation(cls, v: InputLeak) -> "InputLeakDetail":
        return cls(
            controller=v.controller,
            method=v.method,
            endpoint=v.endpoint,
            parameter_name=v.parameter_name,
            parameter_type=v.parameter_type,
            annotation_type=v.binding.annotation,
            entity_class=v.entity_class,
            file=v.file,
            line=v.line,
        )


class FieldLeakDetail(_ReportModel):
    dto_class: str
    field_name: str
    field_type: str
    entity_class: str
    file: str
    line: int

    @classmethod
    def from_violation(cls, v: FieldLeak) -> "FieldLeakDetail":
        return cls(
            dto_class=v.dto_class,
            field_name=v.field_name,
            field_type=v.field_type,
            entity_class=v.entity_class,
            file=v.file,
            line=v.line,
        )


class ViolationCounts(_ReportModel):
    """The three counters; used for totals and threshold reports."""

    entity_return_violations: int = 0
    entity_input_violations: int = 0
    dto_entity_field_violations: int = 0

    def __add__(self, other: "ViolationCounts") -> "ViolationCounts":
        return ViolationCounts(
            entity_return_violations=self.entity_return_violations + other.entity_return_violations,
            entity_input_violations=self.entity_input_violations + other.entity_input_violations,
            dto_entity_field_violations=self.dto_entity_field_violations + other.dto_entity_field_violations,
        )

    @property
    def total(self) -> int:
        return self.entity_return_violations + self.entity_input_violations + self.dto_entity_field_violations


class ModuleReport(_ReportModel):
    """Counts always equal the lengths of the detail lists."""

    entity_return_violations: int
    entity_input_violations: int
    dto_entity_field_violations: int
    entity_return_details: list[ReturnLeakDetail] = Field(default_factory=list)
    entity_input_details: list[InputLeakDetail] = Field(default_factory=list)
    dto_entity_field_details: list[FieldLeakDetail] = Field(default_factory=list)

    @classmethod
    def from_details(
        cls,
        returns: list[ReturnLeakDetail],
        inputs: list[InputLeakDetail],
        fields: list[FieldLeakDetail],
    ) -> "ModuleReport":
        return cls(
            entity_return_violations=len(returns),
            entity_input_violations=len(inputs),
            dto_entity_field_violations=len(fields),
            entity_return_details=returns,
            entity_input_details=inputs,
            dto_entity_field_details=fields,
        )

    @property
    def counts(self) -> ViolationCounts:
        return ViolationCounts(
            entity_return_violations=self.entity_return_violations,
            entity_input_violations=self.entity_input_violations,
            dto_entity_field_violations=self.dto_entity_field_violations,
        )


class LeakReport(_ReportModel):
    modules: dict[str, ModuleReport]
    totals: ViolationCounts

    def to_json(self) -> str:
        """Pretty-printed JSON with a trailing newline; byte-identical for equal reports."""
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


class ThresholdReport(_ReportModel):
    """Counts-only report read from architecture test thresholds."""

    modules: dict[str, ViolationCounts]
    totals: ViolationCounts

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


def aggregate(
    boundary_findings: Iterable[Finding],
    shape_findings: Iterable[Finding],
    known_modules: Iterable[str],
) -> LeakReport:
    """
    Build the report.

    Args:
        boundary_findings: Findings of the boundary scanner, discovery order
        shape_findings: Findings of the shape scanner, discovery order
        known_modules: Modules that must appear even without findings

    Returns:
        LeakReport with modules sorted by label
    """
    returns: dict[str, list[ReturnLeakDetail]] = {}
    inputs: dict[str, list[InputLeakDetail]] = {}
    fields: dict[str, list[FieldLeakDetail]] = {}

    for finding in [*boundary_findings, *shape_findings]:
        violation = finding.violation
        if isinstance(violation, ReturnLeak):
            returns.setdefault(finding.module, []).append(ReturnLeakDetail.from_violation(violation))
        elif isinstance(violation, InputLeak):
            inputs.setdefault(finding.module, []).append(InputLeakDetail.from_violation(violation))
        elif isinstance(violation, FieldLeak):
            fields.setdefault(finding.module, []).append(FieldLeakDetail.from_violation(violation))
        else:
            raise TypeError(f"Unknown violation: {violation!r}")

    all_modules = set(known_modules) | returns.keys() | inputs.keys() | fields.keys()

    modules: dict[str, ModuleReport] = {}
    totals = ViolationCounts()
    for module in sorted(all_modules):
        report = ModuleReport.from_details(
            returns.get(module, []),
            inputs.get(module, []),
            fields.get(module, []),
        )
        modules[module] = report
        totals = totals + report.counts

    return LeakReport(modules=modules, totals=totals)


def write_report(report: LeakReport | ThresholdReport, output_path: Path) -> None:
    """Write a report, creating parent directories as needed."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report.to_json(), encoding="utf-8")
