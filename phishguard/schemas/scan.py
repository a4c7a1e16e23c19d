"""
API Schemas — Request and Response Models

Pydantic models for the PhishGuard API. Response fields keep the
camelCase names clients already render.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from phishguard.config import settings


# ============================================================
# ANALYZE
# ============================================================

class AnalyzeRequest(BaseModel):
    """POST /analyze request body."""
    text: str = Field(
        ..., max_length=settings.MAX_TEXT_LENGTH,
        description="Raw email text, headers optional. Empty text is valid.",
    )

    model_config = {"json_schema_extra": {"examples": [
        {"text": "From: support@secure-paypal.xyz\nSubject: Urgent action required\n\n"
                 "Dear customer, verify your account within 24 hours."},
    ]}}


class AnalyzeBatchRequest(BaseModel):
    """POST /analyze/batch request body."""
    items: list[AnalyzeRequest] = Field(..., min_length=1, max_length=100)


class ExplanationResponse(BaseModel):
    type: str
    details: str
    severity: str


class AnalyzeResponse(BaseModel):
    """POST /analyze response body."""
    overallRisk: int
    riskCategory: str
    detectedPatterns: list[str]
    riskFactors: dict[str, int]
    explanations: list[ExplanationResponse]
    displayScore: int
    recommendations: list[str]
    summary: str
    engineVersion: str
    cached: bool = False


class AnalyzeBatchResponse(BaseModel):
    """POST /analyze/batch response body."""
    results: list[AnalyzeResponse]
    total: int
    analyzed: int


# ============================================================
# RULES
# ============================================================

class RuleResponse(BaseModel):
    id: str
    label: str
    title: str
    description: str
    matcher_kind: str
    per_match_weight: int
    cap: int
    pattern_count: int


class RulesResponse(BaseModel):
    engine_version: str
    total_rules: int
    rules: list[RuleResponse]


# ============================================================
# HEALTH
# ============================================================

class HealthResponse(BaseModel):
    status: str
    version: str
    engine_version: str
    rule_groups: int
    cache: dict
