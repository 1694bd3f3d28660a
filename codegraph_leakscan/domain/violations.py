"""
Violation Domain Models

Immutable facts produced by the scanners. Each finding carries the module
label it was attributed to, so aggregation never re-classifies.
"""

from dataclasses import dataclass
from enum import Enum


class BindingKind(str, Enum):
    """How a request parameter is bound from the HTTP request."""

    BODY = "body"
    PART = "part"

    @property
    def annotation(self) -> str:
        """Annotation text used in reports."""
        return "@RequestBody" if self is BindingKind.BODY else "@RequestPart"


@dataclass(frozen=True)
class ReturnLeak:
    """Entity reachable from an endpoint's declared return type."""

    controller: str
    method: str
    endpoint: str
    return_type: str
    entity_class: str
    file: str
    line: int


@dataclass(frozen=True)
class InputLeak:
    """Entity reachable from a body- or part-bound endpoint parameter."""

    controller: str
    method: str
    endpoint: str
    parameter_name: str
    parameter_type: str
    binding: BindingKind
    entity_class: str
    file: str
    line: int


@dataclass(frozen=True)
class FieldLeak:
    """Entity reachable from a DTO field or record component."""

    dto_class: str
    field_name: str
    field_type: str
    entity_class: str
    file: str
    line: int


Violation = ReturnLeak | InputLeak | FieldLeak


@dataclass(frozen=True)
class Finding:
    """A violation attributed to a module."""

    module: str
    violation: Violation
