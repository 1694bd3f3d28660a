"""
Java declaration extraction with tree-sitter
"""

import pytest

from codegraph_leakscan.domain import (
    ArrayLiteral,
    ArrayType,
    NamedType,
    OpaqueExpr,
    OpaqueType,
    StringLiteral,
    TypeKind,
    WildcardType,
)
from codegraph_leakscan.exceptions import JavaSyntaxError, UnsupportedLanguageError
from codegraph_leakscan.parsing import JavaDeclarationExtractor, ParserRegistry, SourceFile

pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def extractor():
    return JavaDeclarationExtractor()


def extract(extractor, code, path="Test.java"):
    return extractor.extract(SourceFile.from_content(path, code))


def field_types(parsed, type_name):
    decl = next(t for t in parsed.types if t.name == type_name)
    return {f.name: (f.type, f.type_text) for f in decl.fields}


class TestCompilationUnit:
    """Package, imports and type declarations"""

    def test_package_and_imports(self, extractor):
        parsed = extract(
            extractor,
            """
            package com.acme.web;

            import com.acme.domain.Student;
            import com.acme.dto.*;
            import static org.junit.Assert.assertEquals;

            class A {}
            """,
        )

        assert parsed.package == "com.acme.web"
        assert [(i.name, i.is_static, i.is_wildcard) for i in parsed.imports] == [
            ("com.acme.domain.Student", False, False),
            ("com.acme.dto", False, True),
            ("org.junit.Assert.assertEquals", True, False),
        ]
        assert parsed.import_table == {"Student": "com.acme.domain.Student", "assertEquals": "org.junit.Assert.assertEquals"}

    def test_default_package(self, extractor):
        parsed = extract(extractor, "class A {}")
        assert parsed.package == ""
        assert parsed.path == "Test.java"

    def test_nested_and_all_kinds(self, extractor):
        parsed = extract(
            extractor,
            """
            public class Outer {
                static class InnerDTO {}
                interface Api {}
                enum Color { RED }
                record Point(int x, int y) {}
                @interface Marker {}
            }
            """,
        )

        assert [(t.name, t.kind) for t in parsed.types] == [
            ("Outer", TypeKind.CLASS),
            ("InnerDTO", TypeKind.CLASS),
            ("Api", TypeKind.INTERFACE),
            ("Color", TypeKind.ENUM),
            ("Point", TypeKind.RECORD),
            ("Marker", TypeKind.ANNOTATION),
        ]

    def test_syntax_error(self, extractor):
        with pytest.raises(JavaSyntaxError) as exc_info:
            extract(extractor, "public class Broken { void x( }", path="Broken.java")
        assert exc_info.value.details["file"] == "Broken.java"


class TestTypeExpressions:
    """Declared types lowered to TypeExpr"""

    def test_generics(self, extractor):
        parsed = extract(extractor, "class A { Map<String,List<Student>> byName; }")
        type_expr, text = field_types(parsed, "A")["byName"]

        assert type_expr == NamedType(
            "Map", (NamedType("String"), NamedType("List", (NamedType("Student"),)))
        )
        assert text == "Map<String, List<Student>>"

    def test_arrays(self, extractor):
        parsed = extract(extractor, "class A { Student[][] grid; Student legacy[]; }")
        fields = field_types(parsed, "A")

        assert fields["grid"] == (ArrayType(ArrayType(NamedType("Student"))), "Student[][]")
        assert fields["legacy"] == (ArrayType(NamedType("Student")), "Student[]")

    def test_wildcards(self, extractor):
        parsed = extract(
            extractor,
            "class A { List<? extends Student> up; List<? super Student> down; List<?> any; }",
        )
        fields = field_types(parsed, "A")

        assert fields["up"][0] == NamedType("List", (WildcardType(upper=NamedType("Student")),))
        assert fields["down"][0] == NamedType("List", (WildcardType(lower=NamedType("Student")),))
        assert fields["any"][0] == NamedType("List", (WildcardType(),))

    def test_qualified_names_use_simple_name(self, extractor):
        parsed = extract(extractor, "class A { java.util.List<com.acme.Student> s; }")
        assert field_types(parsed, "A")["s"][0] == NamedType("List", (NamedType("Student"),))

    def test_primitives_are_opaque(self, extractor):
        parsed = extract(extractor, "class A { int count; }")
        assert isinstance(field_types(parsed, "A")["count"][0], OpaqueType)

    def test_multiple_declarators(self, extractor):
        parsed = extract(extractor, "class A {\n    private Student a, b;\n}")
        decl = parsed.types[0]
        assert [(f.name, f.line) for f in decl.fields] == [("a", 2), ("b", 2)]

    def test_interface_constants_and_enum_fields(self, extractor):
        parsed = extract(
            extractor,
            """
            interface Defaults { Student FALLBACK = null; }
            enum Kind { A, B; private Student owner; }
            """,
        )
        assert list(field_types(parsed, "Defaults")) == ["FALLBACK"]
        assert list(field_types(parsed, "Kind")) == ["owner"]


class TestMembers:
    """Methods, parameters, record components and annotations"""

    def test_methods_and_parameters(self, extractor):
        parsed = extract(
            extractor,
            """class R {
                @GetMapping("/students")
                public List<Student> getAll(@RequestBody Student s, @RequestPart("f") Student... files, long id) {
                    return null;
                }
                public R() {}
            }""",
        )
        (method,) = parsed.types[0].methods

        assert method.name == "getAll"
        assert method.line == 2
        assert method.return_type_text == "List<Student>"
        assert [a.name for a in method.annotations] == ["GetMapping"]
        assert method.annotations[0].value == StringLiteral("/students")
        assert [(p.name, p.type_text, [a.name for a in p.annotations]) for p in method.parameters] == [
            ("s", "Student", ["RequestBody"]),
            ("files", "Student", ["RequestPart"]),
            ("id", "long", []),
        ]

    def test_record_components(self, extractor):
        parsed = extract(extractor, "package p;\n\npublic record StudentDTO(Professor advisor, String name) {}")
        record = parsed.types[0]

        assert record.kind is TypeKind.RECORD
        assert [(c.name, c.type, c.line) for c in record.components] == [
            ("advisor", NamedType("Professor"), 3),
            ("name", NamedType("String"), 3),
        ]

    def test_annotation_arguments(self, extractor):
        parsed = extract(
            extractor,
            """
            @jakarta.persistence.Entity
            @RequestMapping(path = {"/a", "/b"}, produces = "application/json")
            class A {
                @GetMapping(value = BASE + "/x")
                void m() {}
            }
            """,
        )
        decl = parsed.types[0]
        entity, mapping = decl.annotations

        assert entity.name == "Entity"
        assert entity.value is None
        assert mapping.member("path") == ArrayLiteral((StringLiteral("/a"), StringLiteral("/b")))
        assert mapping.member("produces") == StringLiteral("application/json")
        assert isinstance(decl.methods[0].annotations[0].member("value"), OpaqueExpr)


class TestParserRegistry:
    """Grammar loading"""

    def test_parser_cached_per_thread(self):
        registry = ParserRegistry()
        assert registry.get_parser("java") is registry.get_parser("JAVA")

    def test_unsupported_language(self):
        with pytest.raises(UnsupportedLanguageError):
            ParserRegistry(languages=()).get_parser("java")

