"""
Unit tests for rule evaluation.
"""

import pytest

from loyalty.evaluators import evaluate_rule


def rule(rule_type, active=True, **extra):
    data = {"label": "r", "isActive": active, "ruleType": rule_type}
    data.update(extra)
    return data


class TestConditional:
    """Test CONDITIONAL rules (any input truthy)."""

    def test_any_true(self):
        assert evaluate_rule(rule("CONDITIONAL"), [False, True]) is True

    def test_all_false(self):
        assert evaluate_rule(rule("CONDITIONAL"), [False, 0, ""]) is False

    def test_empty(self):
        assert evaluate_rule(rule("CONDITIONAL"), []) is False

    def test_positive_number_is_truthy(self):
        assert evaluate_rule(rule("CONDITIONAL"), [0, 12.5]) is True


class TestThreshold:
    """Test THRESHOLD rules (numeric sum >= threshold)."""

    def test_reaches_threshold(self):
        assert evaluate_rule(rule("THRESHOLD", threshold=100), [60, 40]) is True

    def test_below_threshold(self):
        assert evaluate_rule(rule("THRESHOLD", threshold=100), [60, 39]) is False

    def test_booleans_count_as_one(self):
        assert evaluate_rule(rule("THRESHOLD", threshold=2), [True, True, False]) is True

    def test_string_threshold(self):
        assert evaluate_rule(rule("THRESHOLD", threshold="50"), ["30", 20]) is True

    def test_missing_threshold_is_zero(self):
        """Test an absent threshold makes any sum >= 0 pass."""
        assert evaluate_rule(rule("THRESHOLD"), []) is True


class TestSequential:
    """Test SEQUENTIAL rules (every input truthy)."""

    def test_all_true(self):
        assert evaluate_rule(rule("SEQUENTIAL"), [True, 1, "yes"]) is True

    def test_one_false(self):
        assert evaluate_rule(rule("SEQUENTIAL"), [True, False]) is False

    def test_empty(self):
        assert evaluate_rule(rule("SEQUENTIAL"), []) is False


class TestNeutralCases:
    """Test rules that evaluate to False without looking at inputs."""

    def test_inactive(self):
        assert evaluate_rule(rule("CONDITIONAL", active=False), [True]) is False

    @pytest.mark.parametrize("rule_type", [None, "", "WEIGHTED"])
    def test_unknown_type(self, rule_type):
        assert evaluate_rule(rule(rule_type), [True]) is False

    def test_none_results_ignored(self):
        """Test None dependency results carry no opinion."""
        assert evaluate_rule(rule("SEQUENTIAL"), [True, None]) is True
        assert evaluate_rule(rule("SEQUENTIAL"), [None]) is False
