"""
Declaration Tree

Immutable structural view of one Java compilation unit, produced by the
parsing layer and shared by every analysis pass.
"""

from dataclasses import dataclass, field
from enum import Enum

from codegraph_leakscan.domain.type_expr import TypeExpr

# ============================================================
# Annotation values
# ============================================================


@dataclass(frozen=True)
class StringLiteral:
    """String literal argument, with quotes removed."""

    value: str


@dataclass(frozen=True)
class ArrayLiteral:
    """`{a, b, ...}` element value array."""

    elements: tuple["AnnotationValue", ...] = ()


@dataclass(frozen=True)
class OpaqueExpr:
    """Any other expression (constants, concatenations, enum references...)."""

    text: str


AnnotationValue = StringLiteral | ArrayLiteral | OpaqueExpr


@dataclass(frozen=True)
class Annotation:
    """
    Annotation usage.

    Attributes:
        name: Simple annotation name (`@org.x.Entity` -> "Entity")
        value: Single unnamed argument (`@GetMapping("/x")`)
        members: Named arguments (`@GetMapping(path = "/x")`)
    """

    name: str
    value: AnnotationValue | None = None
    members: tuple[tuple[str, AnnotationValue], ...] = ()

    def member(self, key: str) -> AnnotationValue | None:
        """Get a named argument by key."""
        for name, value in self.members:
            if name == key:
                return value
        return None


def has_annotation(annotations: tuple[Annotation, ...], name: str) -> bool:
    """Check whether any annotation has the given simple name."""
    return any(annotation.name == name for annotation in annotations)


def find_annotation(annotations: tuple[Annotation, ...], name: str) -> Annotation | None:
    """First annotation with the given simple name."""
    for annotation in annotations:
        if annotation.name == name:
            return annotation
    return None


# ============================================================
# Members
# ============================================================


@dataclass(frozen=True)
class ParameterDecl:
    """Method parameter or record component."""

    name: str
    type: TypeExpr
    type_text: str
    line: int
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class FieldDecl:
    """
    One variable of a field declaration.

    `private Student a, b;` yields two FieldDecls sharing type and line.
    """

    name: str
    type: TypeExpr
    type_text: str
    line: int


@dataclass(frozen=True)
class MethodDecl:
    """Method declaration (constructors are not included)."""

    name: str
    return_type: TypeExpr
    return_type_text: str
    line: int
    annotations: tuple[Annotation, ...] = ()
    parameters: tuple[ParameterDecl, ...] = ()


class TypeKind(str, Enum):
    """Kind of type declaration."""

    CLASS = "class"
    INTERFACE = "interface"
    RECORD = "record"
    ENUM = "enum"
    ANNOTATION = "annotation"


@dataclass(frozen=True)
class TypeDecl:
    """
    Type declaration.

    Nested declarations are listed separately in ParsedFile.types;
    `members` here are only the ones declared directly in this body.
    """

    name: str
    kind: TypeKind
    line: int
    annotations: tuple[Annotation, ...] = ()
    fields: tuple[FieldDecl, ...] = ()
    components: tuple[ParameterDecl, ...] = ()
    methods: tuple[MethodDecl, ...] = ()

    def has_annotation(self, name: str) -> bool:
        return has_annotation(self.annotations, name)


# ============================================================
# Compilation unit
# ============================================================


@dataclass(frozen=True)
class ImportDecl:
    """Import declaration."""

    name: str
    is_static: bool = False
    is_wildcard: bool = False

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ParsedFile:
    """
    Parsed compilation unit.

    Attributes:
        path: Path relative to the source root, "/" separated
        package: Package name ("" for the default package)
        imports: Import declarations in source order
        types: Every type declaration in source order, nested ones included
    """

    path: str
    package: str
    imports: tuple[ImportDecl, ...] = ()
    types: tuple[TypeDecl, ...] = ()
    _import_table: dict[str, str] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        table = self._import_table
        for imp in self.imports:
            if not imp.is_wildcard:
                table[imp.simple_name] = imp.name

    @property
    def import_table(self) -> dict[str, str]:
        """Simple name -> imported qualified name (wildcards excluded). Do not mutate."""
        return self._import_table
