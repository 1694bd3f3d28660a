"""
Module Classifier

Maps a Java package name to a coarse module label using package prefixes.

Matching is longest-prefix, so rule order is irrelevant:

    rules = {"com.acme": "core", "com.acme.billing": "billing"}
    classify("com.acme.billing.web") -> "billing"
    classify("com.acme.util")        -> "core"
    classify("org.other")            -> "other"
"""

from collections.abc import Mapping

UNCLASSIFIED_MODULE = "other"


class ModuleClassifier:
    """Pure, total package -> module mapping."""

    def __init__(self, rules: Mapping[str, str]):
        """
        Args:
            rules: Package prefix -> module label
        """
        # Longest prefix first; ties broken alphabetically for stable output
        self._rules: tuple[tuple[str, str], ...] = tuple(
            sorted(rules.items(), key=lambda rule: (-len(rule[0]), rule[0]))
        )

    @property
    def known_modules(self) -> frozenset[str]:
        """Every label a rule can produce."""
        return frozenset(label for _, label in self._rules)

    def classify(self, namespace: str) -> str:
        """
        Classify a package name.

        Args:
            namespace: Java package name ("" for the default package)

        Returns:
            Module label, or "other" if no rule matches
        """
        for prefix, label in self._rules:
            if namespace.startswith(prefix):
                return label
        return UNCLASSIFIED_MODULE
