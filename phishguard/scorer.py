"""
Risk Score Calculator

Turns per-group contributions into the overall risk score, the
coarse risk category and per-explanation severities. Separated from
engine.py for single-responsibility.

Score = sum of capped group contributions
        + short-email penalty (only when something already matched)

Category (strict thresholds, checked in order):
  > 50  High
  > 25  Medium
  else  Low
"""

from __future__ import annotations

from phishguard.catalog import (
    RuleGroup,
    LOW,
    MEDIUM,
    HIGH,
    HIGH_RISK_ABOVE,
    MEDIUM_RISK_ABOVE,
    SHORT_EMAIL_LENGTH,
    SHORT_EMAIL_PENALTY,
)


def categorize_risk(score: int) -> str:
    """Map an overall risk score to Low / Medium / High."""
    if score > HIGH_RISK_ABOVE:
        return HIGH
    if score > MEDIUM_RISK_ABOVE:
        return MEDIUM
    return LOW


def severity_for(group: RuleGroup, contribution: int) -> str:
    """Severity of one group's explanation, judged against its own thresholds."""
    if group.fixed_severity:
        return group.fixed_severity
    if contribution > group.high_above:
        return HIGH
    if contribution > group.medium_above:
        return MEDIUM
    return LOW


def length_adjustment(text: str, indicator_score: int) -> int:
    """
    Penalty for unusually short emails.

    Only applies once at least one indicator has registered; a short
    message with nothing suspicious in it scores zero.
    """
    if indicator_score > 0 and len(text) < SHORT_EMAIL_LENGTH:
        return SHORT_EMAIL_PENALTY
    return 0


def calculate_risk_score(
    risk_factors: dict[str, int],
    text: str,
) -> tuple[int, dict]:
    """
    Calculate the overall risk score from group contributions.

    Args:
        risk_factors: group id -> capped contribution (nonzero entries).
        text: The original, un-normalized input. Only its length is used.

    Returns:
        (score, breakdown) where breakdown shows every component applied.
    """
    indicator_score = sum(risk_factors.values())
    adjustment = length_adjustment(text, indicator_score)
    score = indicator_score + adjustment

    breakdown = {
        "indicator_score": indicator_score,
        "group_contributions": dict(risk_factors),
        "length_adjustment": adjustment,
        "final_score": score,
    }
    return score, breakdown
