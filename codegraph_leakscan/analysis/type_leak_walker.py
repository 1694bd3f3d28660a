"""
Type-Leak Walker

Finds every entity reachable inside a type expression, however deeply
nested:

    List<Student>                        {Student}
    Page<Student>   (Page is an entity)  {Page, Student}
    Student[][]                          {Student}
    Map<String, ? extends Student>       {Student}

Depth is bounded by the syntactic nesting of the source type.
"""

from collections.abc import Mapping

from codegraph_leakscan.analysis.type_resolver import TypeResolver
from codegraph_leakscan.domain.type_expr import ArrayType, NamedType, OpaqueType, TypeExpr, WildcardType


class TypeLeakWalker:
    """
    Recursive entity search over TypeExpr.

    Holds no mutable state; one instance can serve concurrent scanners.
    """

    def __init__(self, resolver: TypeResolver):
        self.resolver = resolver

    @property
    def catalog(self):
        return self.resolver.catalog

    def find_sensitive(
        self,
        expr: TypeExpr,
        import_table: Mapping[str, str],
        current_namespace: str,
    ) -> frozenset[str]:
        """
        Collect qualified names of entities reachable from a type expression.

        Args:
            expr: Type expression to walk
            import_table: Simple name -> qualified name for the declaring file
            current_namespace: Package of the declaring file

        Returns:
            Qualified entity names (empty if the type is clean)
        """
        if isinstance(expr, NamedType):
            found: set[str] = set()
            resolved = self.resolver.resolve(expr.name, import_table, current_namespace)
            if resolved is not None and resolved in self.catalog:
                found.add(resolved)
            for arg in expr.type_args:
                found |= self.find_sensitive(arg, import_table, current_namespace)
            return frozenset(found)

        if isinstance(expr, ArrayType):
            return self.find_sensitive(expr.component, import_table, current_namespace)

        if isinstance(expr, WildcardType):
            found = set()
            for bound in (expr.upper, expr.lower):
                if bound is not None:
                    found |= self.find_sensitive(bound, import_table, current_namespace)
            return frozenset(found)

        if isinstance(expr, OpaqueType):
            return frozenset()

        raise TypeError(f"Unknown type expression: {expr!r}")


def find_sensitive(
    expr: TypeExpr,
    import_table: Mapping[str, str],
    current_namespace: str,
    resolver: TypeResolver,
) -> frozenset[str]:
    """Functional form of TypeLeakWalker.find_sensitive."""
    return TypeLeakWalker(resolver).find_sensitive(expr, import_table, current_namespace)
