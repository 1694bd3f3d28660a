"""
Endpoint paths: annotation path extraction and path combination
"""

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from codegraph_leakscan.analysis.endpoints import annotation_path, combine_paths
from codegraph_leakscan.domain import Annotation, ArrayLiteral, OpaqueExpr, StringLiteral

# ============================================================
# Strategies (Input Generation)
# ============================================================

segments = st.text(alphabet=st.characters(min_codepoint=97, max_codepoint=122), min_size=1, max_size=12)


class TestCombinePaths:
    """Slash-aware concatenation"""

    def test_examples(self):
        assert combine_paths("/api", "") == "/api"
        assert combine_paths("", "/x") == "/x"
        assert combine_paths("", "") == "/"
        assert combine_paths("/api/", "/x") == "/api/x"
        assert combine_paths("/api", "x") == "/api/x"
        assert combine_paths("/api/", "x") == "/api/x"

    def test_keeps_path_as_written_without_base(self):
        assert combine_paths("", "students") == "students"

    # conftest autouse fixtures are function scoped
    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(base=segments, path=segments, trailing=st.booleans(), leading=st.booleans())
    def test_exactly_one_separator(self, base, path, trailing, leading):
        """Whatever slashes surround the join, exactly one remains"""
        left = "/" + base + ("/" if trailing else "")
        right = ("/" if leading else "") + path
        assert combine_paths(left, right) == f"/{base}/{path}"

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(base=segments)
    def test_empty_method_path_is_identity(self, base):
        assert combine_paths("/" + base, "") == "/" + base


class TestAnnotationPath:
    """Literal path of a mapping annotation"""

    def test_missing_annotation(self):
        assert annotation_path(None) == ""

    def test_marker_without_arguments(self):
        assert annotation_path(Annotation("GetMapping")) == ""

    def test_single_value(self):
        assert annotation_path(Annotation("GetMapping", value=StringLiteral("/x"))) == "/x"

    def test_named_value_and_path(self):
        assert annotation_path(Annotation("GetMapping", members=(("value", StringLiteral("/v")),))) == "/v"
        assert annotation_path(Annotation("GetMapping", members=(("path", StringLiteral("/p")),))) == "/p"

    def test_value_preferred_over_path(self):
        annotation = Annotation("GetMapping", members=(("path", StringLiteral("/p")), ("value", StringLiteral("/v"))))
        assert annotation_path(annotation) == "/v"

    def test_array_uses_first_element(self):
        value = ArrayLiteral((StringLiteral("/a"), StringLiteral("/b")))
        assert annotation_path(Annotation("RequestMapping", value=value)) == "/a"
        assert annotation_path(Annotation("RequestMapping", value=ArrayLiteral())) == ""

    def test_non_literal_is_empty(self):
        """Constants and concatenations degrade to an empty fragment"""
        assert annotation_path(Annotation("GetMapping", value=OpaqueExpr('BASE + "/x"'))) == ""

    def test_unrelated_members_ignored(self):
        annotation = Annotation("GetMapping", members=(("produces", StringLiteral("application/json")),))
        assert annotation_path(annotation) == ""
