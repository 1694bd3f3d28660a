"""
Boundary Scanner

Second pass: REST controllers. For every endpoint method, entities reachable
from the return type become ReturnLeaks and entities reachable from
@RequestBody / @RequestPart parameters become InputLeaks. Path and query
parameters are never inspected.
"""

from codegraph_leakscan.analysis.base import FileScan, Scanner
from codegraph_leakscan.analysis.endpoints import ENDPOINT_MARKERS, annotation_path, combine_paths
from codegraph_leakscan.domain.catalog import simple_name
from codegraph_leakscan.domain.declarations import (
    MethodDecl,
    ParsedFile,
    TypeDecl,
    TypeKind,
    find_annotation,
    has_annotation,
)
from codegraph_leakscan.domain.violations import BindingKind, Finding, InputLeak, ReturnLeak
from codegraph_leakscan.infra.logging import get_logger

logger = get_logger(__name__)


class BoundaryScanner(Scanner):
    """Finds entities crossing the HTTP boundary through endpoint signatures."""

    CONTROLLER_MARKERS = ("RestController", "Controller")
    BASE_PATH_MARKER = "RequestMapping"
    BINDING_MARKERS = (
        ("RequestBody", BindingKind.BODY),
        ("RequestPart", BindingKind.PART),
    )

    def is_controller(self, decl: TypeDecl) -> bool:
        if decl.kind not in (TypeKind.CLASS, TypeKind.INTERFACE):
            return False
        return any(decl.has_annotation(marker) for marker in self.CONTROLLER_MARKERS)

    def scan_file(self, parsed: ParsedFile, out: FileScan) -> None:
        for decl in parsed.types:
            if self.is_controller(decl):
                out.declarations += 1
                self._scan_controller(parsed, decl, out)

    def _scan_controller(self, parsed: ParsedFile, controller: TypeDecl, out: FileScan) -> None:
        module = self.classifier.classify(parsed.package)
        base_path = annotation_path(find_annotation(controller.annotations, self.BASE_PATH_MARKER))

        for method in controller.methods:
            mapping = endpoint_mapping(method)
            if mapping is None:
                continue
            out.members += 1
            verb, method_path = mapping
            endpoint = f"{verb} {combine_paths(base_path, method_path)}"

            for entity in self.sensitive_in(parsed, method.return_type):
                out.findings.append(
                    Finding(
                        module=module,
                        violation=ReturnLeak(
                            controller=controller.name,
                            method=method.name,
                            endpoint=endpoint,
                            return_type=method.return_type_text,
                            entity_class=simple_name(entity),
                            file=parsed.path,
                            line=method.line,
                        ),
                    )
                )

            for param in method.parameters:
                binding = self._binding_of(param.annotations)
                if binding is None:
                    continue
                for entity in self.sensitive_in(parsed, param.type):
                    out.findings.append(
                        Finding(
                            module=module,
                            violation=InputLeak(
                                controller=controller.name,
                                method=method.name,
                                endpoint=endpoint,
                                parameter_name=param.name,
                                parameter_type=param.type_text,
                                binding=binding,
                                entity_class=simple_name(entity),
                                file=parsed.path,
                                line=method.line,
                            ),
                        )
                    )

    def _binding_of(self, annotations) -> BindingKind | None:
        """@RequestBody takes precedence when both markers are present."""
        for marker, binding in self.BINDING_MARKERS:
            if has_annotation(annotations, marker):
                return binding
        return None


def endpoint_mapping(method: MethodDecl) -> tuple[str, str] | None:
    """
    HTTP verb and path fragment of an endpoint method.

    Args:
        method: Method declaration

    Returns:
        (verb, path) from the first matching mapping marker, or None if the
        method is not an endpoint
    """
    for marker, verb in ENDPOINT_MARKERS:
        annotation = find_annotation(method.annotations, marker)
        if annotation is not None:
            return verb, annotation_path(annotation)
    return None
