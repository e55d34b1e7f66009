"""Airtable record types.

Known columns are typed fields; every other column of the source record is
kept untouched in ``extra_fields``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AirtableModel(BaseModel):
    """Base for mapped records, serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class AirtableRecord(AirtableModel):
    """Raw record as returned by the Airtable REST API."""

    id: str
    created_time: str = ""
    fields: dict[str, Any] = Field(default_factory=dict)


class AirtableCompany(AirtableModel):
    """Row of the Companies table."""

    id: str
    name: str
    type: str = "client"
    status: str = "active"
    website: str | None = None
    industry: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    created_time: str
    extra_fields: dict[str, Any] = Field(default_factory=dict)


class RenderingReport(AirtableModel):
    """Row of the Rendering Reports table."""

    id: str
    company_name: str
    client_traffic: str = ""
    client_keywords: str = ""
    client_backlinks: str = ""
    competitor_scores: list[Any] = Field(default_factory=list)
    created_time: str
    extra_fields: dict[str, Any] = Field(default_factory=dict)


class CompetitiveAnalysis(AirtableModel):
    """Row of the Competitive Analysis table with its JSON payload decoded."""

    id: str
    company_name: str
    competitor_analysis: Any = None
    error: str | None = None
    raw_data: str | None = None
    created_time: str
    extra_fields: dict[str, Any] = Field(default_factory=dict)


class Brand(AirtableModel):
    """Row of the news base Brands table."""

    id: str
    name: str
    extra_fields: dict[str, Any] = Field(default_factory=dict)


class NewsScore(AirtableModel):
    """Scored news article joined with its News Monitor source row."""

    id: str
    title: str = ""
    url: str = ""
    category: str = ""
    sentiment_score: int = 0
    relevance_score: int = 0
    source_authority_score: int = 0
    engagement_score: int = 0
    total_score: int = 0
    weekly_trend_tag: str = ""
    recommended_actions: str = ""
    content_type: str = ""
    created_time: str
    article_url: str = ""
    publication_date: str = ""
    brand_id: str = ""
    brand_name: str = ""
    extra_fields: dict[str, Any] = Field(default_factory=dict)
