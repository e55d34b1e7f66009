"""Airtable analytics integration."""

from agencyportal.adapters.airtable.client import AirtableClient
from agencyportal.adapters.airtable.service import AirtableService, match_company_name
from agencyportal.adapters.airtable.types import (
    AirtableCompany,
    AirtableRecord,
    Brand,
    CompetitiveAnalysis,
    NewsScore,
    RenderingReport,
)

__all__ = [
    "AirtableClient",
    "AirtableCompany",
    "AirtableRecord",
    "AirtableService",
    "Brand",
    "CompetitiveAnalysis",
    "NewsScore",
    "RenderingReport",
    "match_company_name",
]
