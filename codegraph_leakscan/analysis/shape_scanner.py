"""
Shape Scanner

Third pass: DTOs, recognized purely by name. Every field of a DTO class or
interface and every component of a DTO record is walked for entities.
Methods are not inspected.
"""

from codegraph_leakscan.analysis.base import FileScan, Scanner
from codegraph_leakscan.domain.catalog import simple_name
from codegraph_leakscan.domain.declarations import ParsedFile, TypeDecl, TypeKind
from codegraph_leakscan.domain.type_expr import TypeExpr
from codegraph_leakscan.domain.violations import FieldLeak, Finding


def is_dto_name(name: str) -> bool:
    """`StudentDTO`, `DTOWrapper`, `StudentDto` yes; `Dtos`, `dtoHelper` no."""
    return "DTO" in name or name.endswith("Dto")


class ShapeScanner(Scanner):
    """Finds entities leaking into DTO shapes."""

    DTO_KINDS = (TypeKind.CLASS, TypeKind.INTERFACE, TypeKind.RECORD)

    def is_dto(self, decl: TypeDecl) -> bool:
        return decl.kind in self.DTO_KINDS and is_dto_name(decl.name)

    def scan_file(self, parsed: ParsedFile, out: FileScan) -> None:
        module = self.classifier.classify(parsed.package)
        for decl in parsed.types:
            if not self.is_dto(decl):
                continue
            out.declarations += 1

            if decl.kind is TypeKind.RECORD:
                members = [(c.name, c.type, c.type_text, c.line) for c in decl.components]
            else:
                members = [(f.name, f.type, f.type_text, f.line) for f in decl.fields]

            for name, type_expr, type_text, line in members:
                out.members += 1
                self._scan_member(parsed, module, decl, name, type_expr, type_text, line, out)

    def _scan_member(
        self,
        parsed: ParsedFile,
        module: str,
        dto: TypeDecl,
        name: str,
        type_expr: TypeExpr,
        type_text: str,
        line: int,
        out: FileScan,
    ) -> None:
        for entity in self.sensitive_in(parsed, type_expr):
            out.findings.append(
                Finding(
                    module=module,
                    violation=FieldLeak(
                        dto_class=dto.name,
                        field_name=name,
                        field_type=type_text,
                        entity_class=simple_name(entity),
                        file=parsed.path,
                        line=line,
                    ),
                )
            )
