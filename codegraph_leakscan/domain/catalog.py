"""
Entity Catalog

Read-only set of sensitive (entity) types, built once before scanning.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def simple_name(qualified_name: str) -> str:
    """`com.acme.Student` -> `Student`."""
    return qualified_name.rsplit(".", 1)[-1]


def qualify(package: str, name: str) -> str:
    """`("com.acme", "Student")` -> `com.acme.Student`; the default package adds no prefix."""
    return f"{package}.{name}" if package else name


@dataclass(frozen=True)
class EntityCatalog:
    """
    Sensitive types known to the analysis.

    Attributes:
        qualified_names: Qualified names of every entity / mapped superclass
        by_short_name: Simple name -> qualified name. When two entities share a
            simple name the one registered last wins.
    """

    qualified_names: frozenset[str] = frozenset()
    by_short_name: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_qualified_names(cls, names: Iterable[str]) -> "EntityCatalog":
        """
        Build a catalog from qualified names, in registration order.

        Args:
            names: Qualified names; later names win short-name collisions

        Returns:
            EntityCatalog instance
        """
        qualified: set[str] = set()
        short: dict[str, str] = {}
        for name in names:
            qualified.add(name)
            short[simple_name(name)] = name
        return cls(qualified_names=frozenset(qualified), by_short_name=MappingProxyType(short))

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self.qualified_names

    def __len__(self) -> int:
        return len(self.qualified_names)

    def lookup_short_name(self, name: str) -> str | None:
        return self.by_short_name.get(name)
