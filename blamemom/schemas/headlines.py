"""
API Schemas — Request and Response Models

Pydantic models for the Blame Mom API.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


# ============================================================
# HEADLINES
# ============================================================

class ArticleModel(BaseModel):
    title: str
    summary: str = ""
    description: str = ""
    link: Optional[str] = None
    source: str = ""
    category: str = ""
    published_at: Optional[str] = None


class HeadlineRecord(BaseModel):
    original: ArticleModel
    transformed: str
    funny_summary: Optional[str] = None
    suitable: bool
    rule: Optional[str] = None


class HeadlineListResponse(BaseModel):
    """GET /api/headlines response body."""
    success: bool = True
    count: int
    headlines: list[HeadlineRecord]


class RandomHeadlineResponse(BaseModel):
    """GET /api/random response body."""
    success: bool
    headline: Optional[HeadlineRecord] = None
    error: Optional[str] = None


class RefreshResponse(BaseModel):
    """GET /api/refresh response body."""
    success: bool = True
    message: str
    count: int


# ============================================================
# TRANSFORM
# ============================================================

class TransformRequest(BaseModel):
    """POST /api/transform request body."""
    headline: Optional[str] = Field(None, max_length=1_000,
                                    description="The headline to blame on your mother.")
    summary: str = Field("", max_length=10_000,
                         description="Optional article summary to rewrite alongside.")

    model_config = {"json_schema_extra": {"examples": [
        {"headline": "Forever chemicals found in lemur habitat"},
    ]}}


class TransformResponse(BaseModel):
    """POST /api/transform response body."""
    success: bool = True
    original: str
    transformed: str
    suitable: bool
    rule: Optional[str] = None
    funny_summary: Optional[str] = None
    diff_spans: list[dict] = []


# ============================================================
# HEALTH
# ============================================================

class HealthResponse(BaseModel):
    status: str
    version: str
    engine_version: str
    rules: int
    linguistic_enabled: bool
    cache: dict
