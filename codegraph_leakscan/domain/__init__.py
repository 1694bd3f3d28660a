"""
Domain layer: type expressions, declarations, entity catalog, violations.
"""

from codegraph_leakscan.domain.catalog import EntityCatalog, qualify, simple_name
from codegraph_leakscan.domain.declarations import (
    Annotation,
    AnnotationValue,
    ArrayLiteral,
    FieldDecl,
    ImportDecl,
    MethodDecl,
    OpaqueExpr,
    ParameterDecl,
    ParsedFile,
    StringLiteral,
    TypeDecl,
    TypeKind,
)
from codegraph_leakscan.domain.module_classifier import UNCLASSIFIED_MODULE, ModuleClassifier
from codegraph_leakscan.domain.type_expr import ArrayType, NamedType, OpaqueType, TypeExpr, WildcardType
from codegraph_leakscan.domain.violations import (
    BindingKind,
    FieldLeak,
    Finding,
    InputLeak,
    ReturnLeak,
    Violation,
)

__all__ = [
    # Types
    "TypeExpr",
    "NamedType",
    "ArrayType",
    "WildcardType",
    "OpaqueType",
    # Declarations
    "Annotation",
    "AnnotationValue",
    "StringLiteral",
    "ArrayLiteral",
    "OpaqueExpr",
    "ParameterDecl",
    "FieldDecl",
    "MethodDecl",
    "TypeDecl",
    "TypeKind",
    "ImportDecl",
    "ParsedFile",
    # Catalog / modules
    "EntityCatalog",
    "simple_name",
    "qualify",
    "ModuleClassifier",
    "UNCLASSIFIED_MODULE",
    # Violations
    "BindingKind",
    "ReturnLeak",
    "InputLeak",
    "FieldLeak",
    "Violation",
    "Finding",
]
