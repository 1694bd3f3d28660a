"""
Java Declaration Extractor

Lowers a tree-sitter Java syntax tree into the immutable declaration tree
(ParsedFile) consumed by the analysis passes. Only what the passes need is
extracted: package, imports, type declarations with their annotations,
fields, record components and methods.
"""

import re

try:
    from tree_sitter import Node as TSNode
except ImportError as e:
    raise ImportError("tree-sitter is required. Install with: pip install tree-sitter") from e

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
from codegraph_leakscan.domain.type_expr import ArrayType, NamedType, OpaqueType, TypeExpr, WildcardType
from codegraph_leakscan.exceptions import JavaSyntaxError
from codegraph_leakscan.parsing.parser_registry import ParserRegistry, get_registry
from codegraph_leakscan.parsing.source_file import SourceFile

TYPE_DECLARATIONS = {
    "class_declaration": TypeKind.CLASS,
    "interface_declaration": TypeKind.INTERFACE,
    "record_declaration": TypeKind.RECORD,
    "enum_declaration": TypeKind.ENUM,
    "annotation_type_declaration": TypeKind.ANNOTATION,
}

# interface constants are "constant_declaration" in the grammar
FIELD_DECLARATIONS = {"field_declaration", "constant_declaration"}
ANNOTATION_NODES = {"annotation", "marker_annotation"}
COMMENT_NODES = {"line_comment", "block_comment", "comment"}
NAME_NODES = {"identifier", "scoped_identifier"}
STRING_PARTS = {"string_fragment", "escape_sequence", "multiline_string_fragment"}

_SPACE_AROUND_PUNCT = re.compile(r"\s*([<>\[\],])\s*")


class JavaDeclarationExtractor:
    """
    Extracts declarations from Java sources.

    Stateless apart from the parser registry; safe to share between threads.
    """

    def __init__(self, registry: ParserRegistry | None = None):
        self._registry = registry or get_registry()

    def extract(self, source: SourceFile) -> ParsedFile:
        """
        Parse a Java source file into its declaration tree.

        Args:
            source: Source file to parse

        Returns:
            ParsedFile

        Raises:
            UnsupportedLanguageError: If no grammar is loaded for the language
            JavaSyntaxError: If the source does not parse cleanly
        """
        parser = self._registry.get_parser(source.language)
        source_bytes = source.source_bytes
        tree = parser.parse(source_bytes)
        root = tree.root_node

        if root.has_error:
            raise JavaSyntaxError(
                f"Syntax error in {source.file_path}",
                {"file": source.file_path, "line": _first_error_line(root)},
            )

        return _UnitLowering(source_bytes).lower(root, source.file_path)


class _UnitLowering:
    """Per-file lowering state (just the source bytes)."""

    def __init__(self, source_bytes: bytes):
        self._src = source_bytes

    def lower(self, root: TSNode, path: str) -> ParsedFile:
        package = ""
        imports: list[ImportDecl] = []
        for child in root.named_children:
            if child.type == "package_declaration":
                package = self._name_of(child)
            elif child.type == "import_declaration":
                imports.append(self._import(child))

        return ParsedFile(
            path=path,
            package=package,
            imports=tuple(imports),
            types=tuple(self._type_declarations(root)),
        )

    # ------------------------------------------------------------
    # Compilation unit
    # ------------------------------------------------------------

    def _name_of(self, node: TSNode) -> str:
        for child in node.named_children:
            if child.type in NAME_NODES:
                return self._text(child)
        return ""

    def _import(self, node: TSNode) -> ImportDecl:
        child_types = {child.type for child in node.children}
        return ImportDecl(
            name=self._name_of(node),
            is_static="static" in child_types,
            is_wildcard="asterisk" in child_types,
        )

    def _type_declarations(self, root: TSNode) -> list[TypeDecl]:
        """Every type declaration in document order, nested and local ones included."""
        found: list[TypeDecl] = []
        stack = [root]
        while stack:
            node = stack.pop()
            kind = TYPE_DECLARATIONS.get(node.type)
            if kind is not None:
                found.append(self._type_decl(node, kind))
            stack.extend(reversed(node.children))
        return found

    def _type_decl(self, node: TSNode, kind: TypeKind) -> TypeDecl:
        fields: list[FieldDecl] = []
        methods: list[MethodDecl] = []
        for member in self._body_members(node.child_by_field_name("body")):
            if member.type in FIELD_DECLARATIONS:
                fields.extend(self._fields(member))
            elif member.type == "method_declaration":
                methods.append(self._method(member))

        components: tuple[ParameterDecl, ...] = ()
        if kind is TypeKind.RECORD:
            components = self._parameters(node.child_by_field_name("parameters"))

        return TypeDecl(
            name=self._text(node.child_by_field_name("name")),
            kind=kind,
            line=_line(node),
            annotations=self._annotations(node),
            fields=tuple(fields),
            components=components,
            methods=tuple(methods),
        )

    def _body_members(self, body: TSNode | None) -> list[TSNode]:
        if body is None:
            return []
        members = []
        for child in body.named_children:
            if child.type == "enum_body_declarations":
                members.extend(child.named_children)
            else:
                members.append(child)
        return members

    # ------------------------------------------------------------
    # Members
    # ------------------------------------------------------------

    def _fields(self, node: TSNode) -> list[FieldDecl]:
        type_node = node.child_by_field_name("type")
        base_type = self._type_expr(type_node)
        base_text = self._type_text(type_node)
        line = _line(node)

        fields = []
        for declarator in node.children_by_field_name("declarator"):
            dims = _dimension_count(declarator.child_by_field_name("dimensions"))
            fields.append(
                FieldDecl(
                    name=self._text(declarator.child_by_field_name("name")),
                    type=_wrap_array(base_type, dims),
                    type_text=base_text + "[]" * dims,
                    line=line,
                )
            )
        return fields

    def _method(self, node: TSNode) -> MethodDecl:
        type_node = node.child_by_field_name("type")
        return MethodDecl(
            name=self._text(node.child_by_field_name("name")),
            return_type=self._type_expr(type_node),
            return_type_text=self._type_text(type_node),
            line=_line(node),
            annotations=self._annotations(node),
            parameters=self._parameters(node.child_by_field_name("parameters")),
        )

    def _parameters(self, node: TSNode | None) -> tuple[ParameterDecl, ...]:
        if node is None:
            return ()
        params = []
        for child in node.named_children:
            if child.type == "formal_parameter":
                params.append(self._formal_parameter(child))
            elif child.type == "spread_parameter":
                params.append(self._spread_parameter(child))
        return tuple(params)

    def _formal_parameter(self, node: TSNode) -> ParameterDecl:
        type_node = node.child_by_field_name("type")
        dims = _dimension_count(node.child_by_field_name("dimensions"))
        return ParameterDecl(
            name=self._text(node.child_by_field_name("name")),
            type=_wrap_array(self._type_expr(type_node), dims),
            type_text=self._type_text(type_node) + "[]" * dims,
            line=_line(node),
            annotations=self._annotations(node),
        )

    def _spread_parameter(self, node: TSNode) -> ParameterDecl:
        """`Student... students`: the declared type is the element type."""
        type_node = None
        name = ""
        for child in node.named_children:
            if child.type == "variable_declarator":
                name = self._text(child.child_by_field_name("name"))
            elif child.type != "modifiers" and child.type not in COMMENT_NODES and type_node is None:
                type_node = child
        return ParameterDecl(
            name=name,
            type=self._type_expr(type_node),
            type_text=self._type_text(type_node),
            line=_line(node),
            annotations=self._annotations(node),
        )

    # ------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------

    def _annotations(self, node: TSNode) -> tuple[Annotation, ...]:
        """Annotations in the `modifiers` child of a declaration."""
        for child in node.children:
            if child.type == "modifiers":
                return tuple(self._annotation(a) for a in child.named_children if a.type in ANNOTATION_NODES)
        return ()

    def _annotation(self, node: TSNode) -> Annotation:
        name = self._text(node.child_by_field_name("name")).rsplit(".", 1)[-1]
        arguments = node.child_by_field_name("arguments")
        if node.type == "marker_annotation" or arguments is None:
            return Annotation(name=name)

        value: AnnotationValue | None = None
        members: list[tuple[str, AnnotationValue]] = []
        for child in arguments.named_children:
            if child.type in COMMENT_NODES:
                continue
            if child.type == "element_value_pair":
                key = self._text(child.child_by_field_name("key"))
                members.append((key, self._annotation_value(child.child_by_field_name("value"))))
            else:
                value = self._annotation_value(child)
        return Annotation(name=name, value=value, members=tuple(members))

    def _annotation_value(self, node: TSNode | None) -> AnnotationValue:
        if node is None:
            return OpaqueExpr("")
        if node.type == "string_literal":
            return StringLiteral(self._string_value(node))
        if node.type == "element_value_array_initializer":
            return ArrayLiteral(
                tuple(self._annotation_value(c) for c in node.named_children if c.type not in COMMENT_NODES)
            )
        return OpaqueExpr(self._text(node))

    def _string_value(self, node: TSNode) -> str:
        if node.child_count == 0:
            # Older grammars expose string literals as a single token
            return self._text(node).strip('"')
        return "".join(self._text(c) for c in node.children if c.type in STRING_PARTS)

    # ------------------------------------------------------------
    # Types
    # ------------------------------------------------------------

    def _type_expr(self, node: TSNode | None) -> TypeExpr:
        if node is None:
            return OpaqueType()

        kind = node.type
        if kind == "type_identifier":
            return NamedType(self._text(node))

        if kind == "scoped_type_identifier":
            return NamedType(self._last_type_identifier(node))

        if kind == "generic_type":
            name = ""
            args: tuple[TypeExpr, ...] = ()
            for child in node.named_children:
                if child.type == "type_identifier":
                    name = self._text(child)
                elif child.type == "scoped_type_identifier":
                    name = self._last_type_identifier(child)
                elif child.type == "type_arguments":
                    args = tuple(self._type_expr(arg) for arg in _type_children(child))
            return NamedType(name, args)

        if kind == "array_type":
            element = self._type_expr(node.child_by_field_name("element"))
            return _wrap_array(element, max(1, _dimension_count(node.child_by_field_name("dimensions"))))

        if kind == "wildcard":
            return self._wildcard(node)

        if kind == "annotated_type":
            underlying = _type_children(node)
            return self._type_expr(underlying[-1]) if underlying else OpaqueType(self._text(node))

        return OpaqueType(self._text(node))

    def _wildcard(self, node: TSNode) -> WildcardType:
        upper: TypeExpr | None = None
        lower: TypeExpr | None = None
        bound = None
        for child in node.children:
            if child.type in ("extends", "super"):
                bound = child.type
            elif bound and child.is_named and child.type not in ANNOTATION_NODES | COMMENT_NODES:
                if bound == "extends":
                    upper = self._type_expr(child)
                else:
                    lower = self._type_expr(child)
        return WildcardType(upper=upper, lower=lower)

    def _last_type_identifier(self, node: TSNode) -> str:
        name = ""
        for child in node.named_children:
            if child.type == "type_identifier":
                name = self._text(child)
        return name

    def _type_text(self, node: TSNode | None) -> str:
        """Declared type as written, with whitespace normalized (`Map<K, V>`)."""
        if node is None:
            return ""
        text = " ".join(self._text(node).split())
        return _SPACE_AROUND_PUNCT.sub(r"\1", text).replace(",", ", ")

    def _text(self, node: TSNode | None) -> str:
        if node is None:
            return ""
        return self._src[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _type_children(node: TSNode) -> list[TSNode]:
    return [c for c in node.named_children if c.type not in ANNOTATION_NODES and c.type not in COMMENT_NODES]


def _wrap_array(expr: TypeExpr, dimensions: int) -> TypeExpr:
    for _ in range(dimensions):
        expr = ArrayType(expr)
    return expr


def _dimension_count(node: TSNode | None) -> int:
    if node is None:
        return 0
    return sum(1 for child in node.children if child.type == "[")


def _line(node: TSNode) -> int:
    """1-based first line of a node (annotations and modifiers included)."""
    return node.start_point[0] + 1


def _first_error_line(root: TSNode) -> int | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return _line(node)
        if node.has_error:
            stack.extend(reversed(node.children))
    return None
