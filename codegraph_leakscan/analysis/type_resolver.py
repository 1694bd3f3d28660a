"""
Type Resolver

Best-guess qualified name for a simple type name, using only what one file
knows about itself. Resolution order:

1. IMPORT: single-type import in the file
2. CATALOG: an entity with that simple name (same package, wildcard import)
3. LOCAL: assume the current package

LOCAL is a heuristic: an unimported JDK or library type named like an entity
in the current package resolves to that entity. It only matters when the
guessed name collides with a catalog entry, so it can produce both false
positives and false negatives. `assume_local_namespace=False` returns None
instead, treating such names as unknown and safe.
"""

from collections.abc import Mapping

from codegraph_leakscan.domain.catalog import EntityCatalog, qualify


class TypeResolver:
    """Resolves simple type names against imports, the entity catalog and the current package."""

    def __init__(self, catalog: EntityCatalog, assume_local_namespace: bool = True):
        """
        Args:
            catalog: Entity catalog (read-only)
            assume_local_namespace: Fall back to `package.Name` for unknown names
        """
        self.catalog = catalog
        self.assume_local_namespace = assume_local_namespace

    def resolve(self, short_name: str, import_table: Mapping[str, str], current_namespace: str) -> str | None:
        """
        Resolve a simple type name.

        Args:
            short_name: Name as written in the type expression
            import_table: Simple name -> qualified name for the file's imports
            current_namespace: Package of the file ("" for the default package)

        Returns:
            Qualified name, or None if unresolved and local fallback is disabled
        """
        imported = import_table.get(short_name)
        if imported is not None:
            return imported

        entity = self.catalog.lookup_short_name(short_name)
        if entity is not None:
            return entity

        if not self.assume_local_namespace:
            return None
        return qualify(current_namespace, short_name)
