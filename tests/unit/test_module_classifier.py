"""
Module classification by package prefix
"""

import pytest

from codegraph_leakscan.config import ARTEMIS_MODULES, default_module_rules
from codegraph_leakscan.domain.module_classifier import UNCLASSIFIED_MODULE, ModuleClassifier


class TestModuleClassifier:
    """Longest-prefix package classification"""

    @pytest.fixture
    def classifier(self):
        return ModuleClassifier({"com.acme": "core", "com.acme.billing": "billing"})

    def test_longest_prefix_wins(self, classifier):
        """More specific rule wins regardless of rule order"""
        assert classifier.classify("com.acme.billing.web") == "billing"
        assert classifier.classify("com.acme.util") == "core"

    def test_rule_order_irrelevant(self):
        """Same result when rules are given in the opposite order"""
        reordered = ModuleClassifier({"com.acme.billing": "billing", "com.acme": "core"})
        assert reordered.classify("com.acme.billing.web") == "billing"

    def test_unmatched_is_other(self, classifier):
        """No matching prefix -> fallback label"""
        assert classifier.classify("org.other") == UNCLASSIFIED_MODULE
        assert classifier.classify("") == UNCLASSIFIED_MODULE

    def test_known_modules(self, classifier):
        assert classifier.known_modules == frozenset({"core", "billing"})

    def test_empty_rules(self):
        """Total even without rules"""
        assert ModuleClassifier({}).classify("com.acme") == UNCLASSIFIED_MODULE


class TestDefaultRules:
    """Artemis module table"""

    def test_every_module_has_a_rule(self):
        rules = default_module_rules()
        assert len(rules) == len(ARTEMIS_MODULES)
        assert set(rules.values()) == set(ARTEMIS_MODULES)

    def test_artemis_package_classification(self):
        classifier = ModuleClassifier(default_module_rules())
        assert classifier.classify("de.tum.cit.aet.artemis.exam.web") == "exam"
        assert classifier.classify("de.tum.cit.aet.artemis.programming.service.ci") == "programming"
        assert classifier.classify("de.tum.cit.aet.artemis") == UNCLASSIFIED_MODULE
