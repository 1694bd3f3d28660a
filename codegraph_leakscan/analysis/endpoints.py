"""
Endpoint identity helpers: mapping-annotation paths and path joining.
"""

from codegraph_leakscan.domain.declarations import Annotation, AnnotationValue, ArrayLiteral, StringLiteral

# Priority order: the first marker present on a method wins
ENDPOINT_MARKERS: tuple[tuple[str, str], ...] = (
    ("GetMapping", "GET"),
    ("PostMapping", "POST"),
    ("PutMapping", "PUT"),
    ("DeleteMapping", "DELETE"),
    ("PatchMapping", "PATCH"),
    ("RequestMapping", "REQUEST"),
)

PATH_MEMBERS = ("value", "path")


def annotation_path(annotation: Annotation | None) -> str:
    """
    Literal path of a mapping annotation.

    Only the first alias of an array value is used. Non-literal values
    (constants, concatenations) yield "".

    Args:
        annotation: Mapping annotation, or None

    Returns:
        Path fragment, possibly ""
    """
    if annotation is None:
        return ""
    if annotation.value is not None:
        return literal_string(annotation.value)
    for key in PATH_MEMBERS:
        value = annotation.member(key)
        if value is not None:
            return literal_string(value)
    return ""


def literal_string(value: AnnotationValue) -> str:
    if isinstance(value, StringLiteral):
        return value.value
    if isinstance(value, ArrayLiteral):
        return literal_string(value.elements[0]) if value.elements else ""
    return ""


def combine_paths(base: str, path: str) -> str:
    """
    Join a controller base path and a method path with exactly one "/".

    Examples:
        combine_paths("", "")        -> "/"
        combine_paths("/api", "")    -> "/api"
        combine_paths("", "/x")      -> "/x"
        combine_paths("/api/", "/x") -> "/api/x"
        combine_paths("/api", "x")   -> "/api/x"
    """
    if not base:
        return path or "/"
    if not path:
        return base
    if base.endswith("/") and path.startswith("/"):
        return base + path[1:]
    if not base.endswith("/") and not path.startswith("/"):
        return f"{base}/{path}"
    return base + path
