"""
Rule Catalog — Immutable Indicator Table

The catalog defines every phishing indicator the engine knows about:
  1. Which phrases or patterns make up each indicator group
  2. How each group is matched (phrase containment or regex search)
  3. How much each match weighs, and where the group's weight is capped
  4. How a group's contribution maps to an explanation severity

This module is data, not behaviour. The evaluation loop lives in
engine.py and dispatches on MatcherKind; nothing here is mutated
after import.

The weights, caps and thresholds below are part of the scoring
contract. Changing them changes every score the engine produces.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class MatcherKind(str, Enum):
    """How a rule group compares its patterns against text."""
    SUBSTRING_SET = "substringSet"  # distinct phrase containment
    REGEX_SET = "regexSet"          # every non-overlapping regex match


# --- Severity labels ---
LOW = "Low"
MEDIUM = "Medium"
HIGH = "High"

# --- Risk category thresholds (strictly greater than) ---
HIGH_RISK_ABOVE = 50
MEDIUM_RISK_ABOVE = 25

# --- Short email adjustment ---
SHORT_EMAIL_LENGTH = 100
SHORT_EMAIL_PENALTY = 10
SHORT_EMAIL_TITLE = "Suspicious Email Length"
SHORT_EMAIL_DETAILS = "Email is unusually short, which is common in phishing attempts"


Pattern = Union[str, re.Pattern]


@dataclass(frozen=True)
class RuleGroup:
    """
    One indicator category.

    substringSet groups hold lower-case phrases; regexSet groups hold
    patterns compiled with re.ASCII, so \\d, \\w and \\b only see ASCII
    characters. Either way the tuple is fixed at construction.
    """
    id: str
    matcher_kind: MatcherKind
    patterns: tuple[Pattern, ...]
    per_match_weight: int
    cap: int
    label: str              # Shown in the detected-patterns list
    title: str              # Explanation type
    description: str
    details_template: str   # {count}, {examples}, {matches}
    high_above: int = 0
    medium_above: int = 0
    fixed_severity: Optional[str] = None

    def __post_init__(self):
        if not self.patterns:
            raise ValueError(f"Rule group '{self.id}' has no patterns")
        if self.per_match_weight <= 0:
            raise ValueError(
                f"Rule group '{self.id}' needs a positive per-match weight"
            )
        if self.cap < self.per_match_weight:
            raise ValueError(
                f"Rule group '{self.id}' cap {self.cap} is below its "
                f"per-match weight {self.per_match_weight}"
            )
        if self.matcher_kind is MatcherKind.REGEX_SET:
            if not all(isinstance(p, re.Pattern) for p in self.patterns):
                raise ValueError(
                    f"Rule group '{self.id}' is a regex set but holds "
                    f"uncompiled patterns"
                )
            if not all(p.flags & re.ASCII for p in self.patterns):
                raise ValueError(
                    f"Rule group '{self.id}' regexes must be compiled with re.ASCII"
                )
        elif not all(isinstance(p, str) and p == p.lower() for p in self.patterns):
            raise ValueError(
                f"Rule group '{self.id}' phrases must be lower-case strings"
            )

    def contribution(self, match_count: int) -> int:
        """Capped score for a given number of matches."""
        return min(match_count * self.per_match_weight, self.cap)


# ============================================================
# THE CATALOG (declaration order is output order)
# ============================================================

RULE_CATALOG: tuple[RuleGroup, ...] = (
    RuleGroup(
        id="urgency",
        matcher_kind=MatcherKind.SUBSTRING_SET,
        patterns=(
            "urgent action required",
            "immediate attention",
            "act now",
            "limited time",
            "expires",
            "deadline",
            "urgent notice",
            "immediate response required",
            "24 hours",
            "account suspended",
        ),
        per_match_weight=5,
        cap=25,
        label="Urgency tactics",
        title="Urgency and Pressure",
        description="Urgency tactics and pressure language",
        details_template="Found {count} urgency phrases like: {examples}",
        high_above=15,
        medium_above=5,
    ),
    RuleGroup(
        id="suspiciousLinks",
        matcher_kind=MatcherKind.REGEX_SET,
        patterns=(
            re.compile(r"https?://[^\s/$.?#].[^\s]*", re.ASCII),
            # URL shorteners
            re.compile(r"bit\.ly", re.ASCII),
            re.compile(r"tinyurl", re.ASCII),
            re.compile(r"goo\.gl", re.ASCII),
            # Throwaway TLDs, unless the host is a mainstream brand
            re.compile(
                r"\b(?!google\.com|microsoft\.com|apple\.com|amazon\.com|paypal\.com)"
                r"\w+\.(?:xyz|tk|ml|ga|cf|gq|info)\b",
                re.ASCII,
            ),
        ),
        per_match_weight=10,
        cap=40,
        label="Suspicious links",
        title="Suspicious Links",
        description="Suspicious links and domains",
        details_template="Found {count} potentially suspicious links or domains",
        high_above=20,
        medium_above=10,
    ),
    RuleGroup(
        id="poorGrammar",
        matcher_kind=MatcherKind.REGEX_SET,
        patterns=(
            re.compile(r"(?:i|we) (?:needs|has|have been) to", re.ASCII),
            re.compile(r"(?:please|kindly) (?:do|does|did) the", re.ASCII),
            re.compile(r"(?:please|kindly) (?:clicks|clicking|clicked) on", re.ASCII),
            re.compile(r"(?:please|kindly) (?:sends|sending|sent) the", re.ASCII),
        ),
        per_match_weight=5,
        cap=15,
        label="Grammar and spelling issues",
        title="Poor Grammar",
        description="Grammar and spelling errors",
        details_template="Found {count} grammar or spelling issues",
        high_above=10,
        medium_above=5,
    ),
    RuleGroup(
        id="suspiciousSender",
        matcher_kind=MatcherKind.REGEX_SET,
        patterns=(
            # Random alphanumeric local part at the very start of the text
            re.compile(r"^(?=.*[a-z])(?=.*\d)[a-z\d]{10,}@", re.ASCII),
            # Unusually long domain on a non-webmail address
            re.compile(
                r"@(?!gmail\.com|yahoo\.com|outlook\.com|hotmail\.com|aol\.com).{20,}",
                re.ASCII,
            ),
            # Support mailbox on an uncommon TLD
            re.compile(r"support@[\w-]+\.(?!com|org|net|edu|gov)", re.ASCII),
        ),
        per_match_weight=15,
        cap=30,
        label="Suspicious sender address",
        title="Suspicious Sender",
        description="Suspicious sender addresses",
        details_template="Email appears to come from a suspicious sender pattern",
        high_above=20,
        medium_above=10,
    ),
    RuleGroup(
        id="sensitiveInfoRequests",
        matcher_kind=MatcherKind.SUBSTRING_SET,
        patterns=(
            "social security",
            "ssn",
            "password",
            "credit card",
            "bank account",
            "verify your account",
            "confirm your information",
            "update your details",
            "validate your account",
            "account verification",
            "security check",
        ),
        per_match_weight=15,
        cap=45,
        label="Requests for sensitive information",
        title="Sensitive Information Request",
        description="Requests for sensitive information",
        details_template=(
            "Found {count} requests for sensitive information like: {examples}"
        ),
        high_above=30,
        medium_above=15,
    ),
    RuleGroup(
        id="suspiciousGreetings",
        matcher_kind=MatcherKind.SUBSTRING_SET,
        patterns=(
            "dear user",
            "dear customer",
            "dear account holder",
            "valued customer",
            "attention",
            "hello dear",
            "greetings",
        ),
        per_match_weight=5,
        cap=10,
        label="Generic or suspicious greeting",
        title="Suspicious Greeting",
        description="Generic or suspicious greetings",
        details_template="Email uses generic greetings like: {matches}",
        # Generic greetings alone are weak evidence
        fixed_severity=LOW,
    ),
    RuleGroup(
        id="impersonation",
        matcher_kind=MatcherKind.SUBSTRING_SET,
        patterns=(
            "paypal team",
            "apple support",
            "microsoft security",
            "amazon customer service",
            "bank support",
            "it department",
            "google security",
            "facebook security",
            "security team",
        ),
        per_match_weight=10,
        cap=30,
        label="Brand/organization impersonation",
        title="Impersonation",
        description="Brand or organization impersonation",
        details_template="Email appears to impersonate: {matches}",
        high_above=20,
        medium_above=10,
    ),
    RuleGroup(
        id="attachmentThreats",
        matcher_kind=MatcherKind.SUBSTRING_SET,
        patterns=(
            "download attachment",
            "open attachment",
            "see attached file",
            "view attachment",
            "attachment contains",
            "in the attachment",
        ),
        per_match_weight=10,
        cap=20,
        label="Suspicious attachment references",
        title="Attachment Threats",
        description="Attachment-based threats",
        details_template="Email references suspicious attachments",
        high_above=15,
        medium_above=5,
    ),
    RuleGroup(
        id="fearReward",
        matcher_kind=MatcherKind.SUBSTRING_SET,
        patterns=(
            "your account has been",
            "unauthorized login",
            "suspicious activity",
            "won lottery",
            "prize winner",
            "you have won",
            "inheritance",
            "million dollars",
            "unclaimed funds",
            "free gift",
        ),
        per_match_weight=10,
        cap=25,
        label="Fear or reward manipulation",
        title="Fear/Reward Manipulation",
        description="Fear or reward manipulation",
        details_template=(
            "Found {count} fear or reward manipulation phrases like: {examples}"
        ),
        high_above=15,
        medium_above=5,
    ),
)


def get_rule_group(group_id: str) -> Optional[RuleGroup]:
    """Look up a catalog group by id."""
    for group in RULE_CATALOG:
        if group.id == group_id:
            return group
    return None
