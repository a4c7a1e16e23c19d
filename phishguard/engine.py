"""
Scoring Engine — Deterministic Phishing Indicator Evaluation

The engine runs every rule group in the catalog against a block of
raw email text and folds the results into one AnalysisResult:

  1. Normalize (lower-case once)
  2. Count matches per group (dispatch on MatcherKind)
  3. Cap each group's contribution
  4. Aggregate, apply the short-email penalty, categorize

No I/O, no randomness, no state between calls. The same text always
produces the same result, and any string is valid input.

Matching is case-insensitive through a single str.lower() pass. That
covers ASCII and other one-to-one case mappings. Characters whose
upper-case form lower-cases to something else (dotless "ı", "ß" -> "SS")
can score differently from their upper-cased text, and the short-email
penalty always measures the text as given.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Union

from phishguard.catalog import (
    MatcherKind,
    RuleGroup,
    RULE_CATALOG,
    SHORT_EMAIL_TITLE,
    SHORT_EMAIL_DETAILS,
    MEDIUM,
)
from phishguard.scorer import calculate_risk_score, categorize_risk, severity_for
from phishguard.logging import get_logger

logger = get_logger(__name__)

ENGINE_VERSION = "1.0.0"


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass
class Explanation:
    """One human-readable line of the analysis."""
    type: str
    details: str
    severity: str  # "Low", "Medium", "High"


@dataclass
class GroupMatch:
    """Matches found for a single rule group."""
    group: RuleGroup
    count: int
    matched: list[str]  # Distinct phrases, or matched regex fragments

    @property
    def contribution(self) -> int:
        return self.group.contribution(self.count)


@dataclass
class AnalysisResult:
    """Result of one analyze() call."""
    overall_risk: int
    risk_category: str
    detected_patterns: list[str] = field(default_factory=list)
    risk_factors: dict[str, int] = field(default_factory=dict)
    explanations: list[Explanation] = field(default_factory=list)
    engine_version: str = ENGINE_VERSION

    def to_dict(self) -> dict:
        """JSON-ready form with the public camelCase field names."""
        return {
            "overallRisk": self.overall_risk,
            "riskCategory": self.risk_category,
            "detectedPatterns": list(self.detected_patterns),
            "riskFactors": dict(self.risk_factors),
            "explanations": [asdict(e) for e in self.explanations],
        }


# ============================================================
# THE ENGINE
# ============================================================

class ScoringEngine:
    """
    Catalog-driven evaluator.

    Instantiated once as a module singleton. The only long-lived
    attribute is the catalog tuple, which is never modified, so the
    same instance can serve concurrent callers.
    """

    def __init__(self, catalog: tuple[RuleGroup, ...] = RULE_CATALOG):
        self._catalog = tuple(catalog)

    @property
    def catalog(self) -> tuple[RuleGroup, ...]:
        return self._catalog

    def analyze(self, text: Union[str, bytes]) -> AnalysisResult:
        """
        Score a block of email text.

        Args:
            text: Raw email text, headers optional. May be empty.
                Bytes are decoded as UTF-8 with replacement.

        Returns:
            AnalysisResult with score, category and explanations.
        """
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")

        normalized = text.lower()

        detected_patterns: list[str] = []
        risk_factors: dict[str, int] = {}
        explanations: list[Explanation] = []

        for group in self._catalog:
            match = self._match_group(normalized, group)
            if match.count == 0:
                continue
            contribution = match.contribution
            risk_factors[group.id] = contribution
            detected_patterns.append(group.label)
            explanations.append(Explanation(
                type=group.title,
                details=self._format_details(match),
                severity=severity_for(group, contribution),
            ))

        overall_risk, breakdown = calculate_risk_score(risk_factors, text)
        if breakdown["length_adjustment"]:
            explanations.append(Explanation(
                type=SHORT_EMAIL_TITLE,
                details=SHORT_EMAIL_DETAILS,
                severity=MEDIUM,
            ))

        risk_category = categorize_risk(overall_risk)
        logger.debug(
            "Analyzed %d chars: score=%d category=%s groups=%s",
            len(text), overall_risk, risk_category, list(risk_factors),
        )

        return AnalysisResult(
            overall_risk=overall_risk,
            risk_category=risk_category,
            detected_patterns=detected_patterns,
            risk_factors=risk_factors,
            explanations=explanations,
        )

    def _match_group(self, normalized: str, group: RuleGroup) -> GroupMatch:
        """Count a group's matches against lower-cased text."""
        if group.matcher_kind is MatcherKind.SUBSTRING_SET:
            # Each phrase counts once no matter how often it repeats
            found = [phrase for phrase in group.patterns if phrase in normalized]
            return GroupMatch(group=group, count=len(found), matched=found)

        fragments: list[str] = []
        for pattern in group.patterns:
            fragments.extend(m.group(0) for m in pattern.finditer(normalized))
        return GroupMatch(group=group, count=len(fragments), matched=fragments)

    @staticmethod
    def _format_details(match: GroupMatch) -> str:
        examples = ", ".join(match.matched[:3])
        if len(match.matched) > 3:
            examples += "..."
        return match.group.details_template.format(
            count=match.count,
            examples=examples,
            matches=", ".join(match.matched),
        )

    def get_rules(self) -> list[dict]:
        """
        Describe every rule group in the catalog.

        Used by the GET /rules endpoint to expose the detection surface.
        """
        return [
            {
                "id": g.id,
                "label": g.label,
                "title": g.title,
                "description": g.description,
                "matcher_kind": g.matcher_kind.value,
                "per_match_weight": g.per_match_weight,
                "cap": g.cap,
                "pattern_count": len(g.patterns),
            }
            for g in self._catalog
        ]


# ============================================================
# SINGLETON (instantiated once, never mutated)
# ============================================================

scoring_engine = ScoringEngine()


def analyze(text: Union[str, bytes]) -> AnalysisResult:
    """Score email text with the shared engine."""
    return scoring_engine.analyze(text)
