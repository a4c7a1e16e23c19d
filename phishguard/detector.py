"""
Detector — Scan Orchestrator

Wraps the scoring engine for the API layer:
  - runs analyze() on the submitted text
  - adds the display-only fields a client renders (clamped score,
    recommendations, one-line summary)
  - logs the outcome

The engine result is never altered here; displayScore is a separate
field so overallRisk keeps its unclamped value.
"""

from __future__ import annotations

import time

from phishguard.catalog import LOW
from phishguard.engine import AnalysisResult, analyze, ENGINE_VERSION
from phishguard.logging import get_logger

logger = get_logger(__name__)


# ============================================================
# RECOMMENDATIONS
# ============================================================

RISKY_EMAIL_ADVICE: tuple[str, ...] = (
    "Do not click on any links in the email",
    "Do not download or open attachments",
    "Do not reply with personal or financial information",
    "If the email claims to be from a legitimate organization, contact them "
    "directly through their official website or phone number",
    "Report the email as phishing to your email provider",
)

CLEAN_EMAIL_ADVICE: tuple[str, ...] = (
    "This email appears to be legitimate, but always remain vigilant",
)

MINOR_INDICATOR_ADVICE: tuple[str, ...] = (
    "The email shows some minor suspicious indicators, but may be legitimate",
    "Exercise caution when interacting with content in this email",
)


def recommendations_for(result: AnalysisResult) -> list[str]:
    """Guidance to show alongside a result."""
    if result.risk_category != LOW:
        return list(RISKY_EMAIL_ADVICE)
    if not result.detected_patterns:
        return list(CLEAN_EMAIL_ADVICE)
    return list(MINOR_INDICATOR_ADVICE)


def display_score(score: int) -> int:
    """Clamp a risk score to the 0-100 display scale."""
    return max(0, min(100, score))


def build_summary(result: AnalysisResult) -> str:
    count = len(result.detected_patterns)
    if count == 0:
        return f"{result.risk_category} risk: no phishing indicators detected."
    noun = "category" if count == 1 else "categories"
    return (
        f"{result.risk_category} risk: {count} indicator {noun} detected "
        f"(score {result.overall_risk})."
    )


# ============================================================
# SCAN
# ============================================================

def build_payload(result: AnalysisResult) -> dict:
    """Engine result plus display fields, in API shape."""
    payload = result.to_dict()
    payload.update({
        "displayScore": display_score(result.overall_risk),
        "recommendations": recommendations_for(result),
        "summary": build_summary(result),
        "engineVersion": result.engine_version,
        "cached": False,
    })
    return payload


async def scan_email(text: str) -> dict:
    """
    Analyze one email and build the API payload.

    The engine call is synchronous and CPU-bound; it returns
    immediately with no artificial delay.
    """
    start = time.perf_counter()
    result = analyze(text)
    duration_ms = round((time.perf_counter() - start) * 1000, 2)

    logger.info(
        f"Scan complete: score={result.overall_risk} category={result.risk_category}",
        extra={
            "risk_score": result.overall_risk,
            "risk_category": result.risk_category,
            "patterns_count": len(result.detected_patterns),
            "text_length": len(text),
            "duration_ms": duration_ms,
            "engine_version": ENGINE_VERSION,
        },
    )
    return build_payload(result)
