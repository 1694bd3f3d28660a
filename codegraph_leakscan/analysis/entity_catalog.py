"""
Entity Catalog Builder

First pass: every type declaration marked @Entity or @MappedSuperclass
becomes a sensitive type. Membership is never inferred (no inheritance).
"""

from collections.abc import Iterable

from codegraph_leakscan.domain.catalog import EntityCatalog, qualify
from codegraph_leakscan.domain.declarations import ParsedFile
from codegraph_leakscan.infra.logging import get_logger

logger = get_logger(__name__)


class EntityCatalogBuilder:
    """Builds the read-only EntityCatalog from parsed files."""

    ENTITY_MARKERS = ("Entity", "MappedSuperclass")

    def build(self, files: Iterable[ParsedFile]) -> EntityCatalog:
        """
        Build the catalog.

        Args:
            files: Successfully parsed files, in enumeration order

        Returns:
            EntityCatalog; later files win short-name collisions
        """
        names: list[str] = []
        for parsed in files:
            for decl in parsed.types:
                if any(decl.has_annotation(marker) for marker in self.ENTITY_MARKERS):
                    names.append(qualify(parsed.package, decl.name))

        catalog = EntityCatalog.from_qualified_names(names)
        logger.info("entity_catalog_built", entities=len(catalog))
        return catalog
