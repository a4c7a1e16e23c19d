"""
Tests for the risk score calculator.
"""

import pytest

from phishguard.catalog import get_rule_group
from phishguard.scorer import (
    calculate_risk_score,
    categorize_risk,
    length_adjustment,
    severity_for,
)


class TestCategorizeRisk:
    """Strict thresholds: > 50 High, > 25 Medium."""

    @pytest.mark.parametrize("score,expected", [
        (0, "Low"),
        (15, "Low"),
        (25, "Low"),
        (26, "Medium"),
        (50, "Medium"),
        (51, "High"),
        (165, "High"),
    ])
    def test_boundaries(self, score, expected):
        assert categorize_risk(score) == expected


class TestSeverity:

    def test_urgency_thresholds(self):
        urgency = get_rule_group("urgency")
        assert severity_for(urgency, 5) == "Low"
        assert severity_for(urgency, 10) == "Medium"
        assert severity_for(urgency, 15) == "Medium"
        assert severity_for(urgency, 20) == "High"

    def test_links_thresholds(self):
        links = get_rule_group("suspiciousLinks")
        assert severity_for(links, 10) == "Low"
        assert severity_for(links, 20) == "Medium"
        assert severity_for(links, 30) == "High"

    def test_greeting_fixed_low(self):
        greetings = get_rule_group("suspiciousGreetings")
        assert severity_for(greetings, 10) == "Low"


class TestLengthAdjustment:

    def test_short_with_indicators(self):
        assert length_adjustment("short", 5) == 10

    def test_short_without_indicators(self):
        assert length_adjustment("short", 0) == 0

    def test_long_text(self):
        assert length_adjustment("x" * 100, 40) == 0


class TestCalculateRiskScore:

    def test_sum_and_breakdown(self):
        factors = {"urgency": 5, "suspiciousLinks": 10}
        score, breakdown = calculate_risk_score(factors, "x" * 200)
        assert score == 15
        assert breakdown["indicator_score"] == 15
        assert breakdown["length_adjustment"] == 0
        assert breakdown["final_score"] == 15
        assert breakdown["group_contributions"] == factors

    def test_short_text_penalty(self):
        score, breakdown = calculate_risk_score({"urgency": 5}, "urgent action required")
        assert score == 15
        assert breakdown["length_adjustment"] == 10

    def test_no_factors(self):
        score, breakdown = calculate_risk_score({}, "")
        assert score == 0
        assert breakdown["length_adjustment"] == 0

    def test_not_clamped(self):
        factors = {"a": 45, "b": 40, "c": 30}
        score, _ = calculate_risk_score(factors, "x" * 500)
        assert score == 115
