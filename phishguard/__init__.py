"""
PhishGuard — Heuristic Phishing Risk Scoring

Scores raw email text against a fixed catalog of weighted phishing
indicators and explains the result.

Public API:
  - analyze:        Score email text (pure, deterministic, never raises)
  - AnalysisResult: Score, category, detected patterns, explanations
  - ScoringEngine:  Catalog-driven evaluator behind analyze()
  - RULE_CATALOG:   The immutable indicator table
  - scan_email:     analyze() plus display fields, for the API layer

Usage:
    from phishguard import analyze
    result = analyze(email_text)
    result.overall_risk, result.risk_category
"""

__version__ = "1.0.0"

from phishguard.catalog import (
    MatcherKind,
    RuleGroup,
    RULE_CATALOG,
    get_rule_group,
)
from phishguard.engine import (
    analyze,
    scoring_engine,
    AnalysisResult,
    Explanation,
    ScoringEngine,
    ENGINE_VERSION,
)
from phishguard.scorer import calculate_risk_score, categorize_risk
from phishguard.detector import scan_email, recommendations_for

__all__ = [
    "MatcherKind",
    "RuleGroup",
    "RULE_CATALOG",
    "get_rule_group",
    "analyze",
    "scoring_engine",
    "AnalysisResult",
    "Explanation",
    "ScoringEngine",
    "ENGINE_VERSION",
    "calculate_risk_score",
    "categorize_risk",
    "scan_email",
    "recommendations_for",
]
