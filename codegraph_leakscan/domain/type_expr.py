"""
Type Expression Model

Structural view of a declared Java type, just detailed enough for the
type-leak walker:

    List<Student>           NamedType("List", (NamedType("Student"),))
    Student[]               ArrayType(NamedType("Student"))
    ? extends Student       WildcardType(upper=NamedType("Student"))
    int / void / var        OpaqueType("int")
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NamedType:
    """
    Class or interface type, possibly parameterized.

    Attributes:
        name: Simple name as written (last segment of a scoped name)
        type_args: Type arguments, in declaration order
    """

    name: str
    type_args: tuple["TypeExpr", ...] = ()


@dataclass(frozen=True)
class ArrayType:
    """Array of any type; multi-dimensional arrays nest."""

    component: "TypeExpr"


@dataclass(frozen=True)
class WildcardType:
    """`?`, `? extends upper` or `? super lower`."""

    upper: "TypeExpr | None" = None
    lower: "TypeExpr | None" = None


@dataclass(frozen=True)
class OpaqueType:
    """Primitive, void or otherwise unstructured type. Never sensitive."""

    text: str = ""


TypeExpr = NamedType | ArrayType | WildcardType | OpaqueType
