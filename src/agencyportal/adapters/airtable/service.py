"""Maps Airtable tables onto portal types."""

import json
import re
from datetime import UTC, datetime
from typing import Any

import structlog

from agencyportal.adapters.airtable.client import AirtableClient
from agencyportal.adapters.airtable.types import (
    AirtableCompany,
    AirtableRecord,
    Brand,
    CompetitiveAnalysis,
    NewsScore,
    RenderingReport,
)
from agencyportal.core.exceptions import ValidationError

logger = structlog.get_logger()

RECORD_ID_PATTERN = re.compile(r"^rec[A-Za-z0-9]{14}$")
NEWS_SCORES_LIMIT = 4

COMPANY_FIELDS = {
    "name": "Name",
    "type": "Type",
    "status": "Status",
    "website": "Website",
    "industry": "Industry",
    "contact_email": "Contact Email",
    "contact_phone": "Contact Phone",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip_code": "Zip Code",
    "country": "Country",
}

REPORT_COMPANY_FIELDS = ("Company", "company_name", "Company Name")
REPORT_TRAFFIC_FIELDS = ("client_traffic", "Client Traffic")
REPORT_KEYWORDS_FIELDS = ("client_keywords", "Client Keywords")
REPORT_BACKLINKS_FIELDS = ("client_backlinks", "Client Backlinks")

NEWS_SCORE_FIELDS = {
    "title": "Title",
    "url": "URL",
    "category": "Category",
    "weekly_trend_tag": "WeeklyTrendTag",
    "recommended_actions": "RecommendedActions",
    "content_type": "Content Type",
}
NEWS_SCORE_METRICS = {
    "sentiment_score": "Sentiment Score",
    "relevance_score": "Relevance Score",
    "source_authority_score": "SourceAuthorityScore",
    "engagement_score": "EngagementScore",
    "total_score": "TotalScore",
}


def normalize_company_name(name: str) -> str:
    """Lowercase, drop punctuation and collapse whitespace."""
    cleaned = re.sub(r"[^a-z0-9\s]", "", name.lower())
    return re.sub(r"\s+", " ", cleaned).strip()


def match_company_name(candidate: str, target: str) -> bool:
    """Loosely match two company names.

    Tries, in order: normalized equality, equality ignoring spaces,
    containment either way (with and without spaces), then overlap of
    significant words (longer than two characters) covering at least half
    of the shorter name.

    Args:
        candidate: Name as written in Airtable.
        target: Name of the portal company.

    Returns:
        True if the names refer to the same company.
    """
    if not candidate or not target:
        return False

    a = normalize_company_name(candidate)
    b = normalize_company_name(target)
    if not a or not b:
        return False
    if a == b:
        return True

    compact_a = a.replace(" ", "")
    compact_b = b.replace(" ", "")
    if compact_a == compact_b:
        return True
    if a in b or b in a:
        return True
    if compact_a in compact_b or compact_b in compact_a:
        return True

    words_a = [w for w in a.split(" ") if len(w) > 2]
    words_b = [w for w in b.split(" ") if len(w) > 2]
    if not words_a or not words_b:
        return False
    common = [w for w in words_a if any(w in other or other in w for other in words_b)]
    return len(common) >= min(len(words_a), len(words_b)) / 2


def _first(fields: dict[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = fields.get(name)
        if value:
            return value
    return None


def _extra(fields: dict[str, Any], known: set[str] | tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in known and k != "_createdTime"}


def _created_time(record: AirtableRecord) -> str:
    created = record.fields.get("_createdTime") or record.created_time
    return str(created) if created else datetime.now(UTC).isoformat()


def _scaled(value: Any) -> int:
    """Scale a 0-1 score to 0-100."""
    try:
        return round(float(value or 0) * 100)
    except (TypeError, ValueError):
        return 0


def _parse_competitor_scores(value: Any) -> list[Any]:
    if not value:
        return []
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("competitor_scores_unparseable")
            return []
        return parsed if isinstance(parsed, list) else [parsed]
    if isinstance(value, list):
        return value
    return [value]


def _ensure_record_id(record_id: str) -> str:
    if not RECORD_ID_PATTERN.match(record_id):
        raise ValidationError(f"Invalid Airtable record id: {record_id}")
    return record_id


class AirtableService:
    """Reads analytics tables from the main and news Airtable bases."""

    def __init__(
        self,
        client: AirtableClient,
        base_id: str,
        news_base_id: str,
    ) -> None:
        """Initialize the service.

        Args:
            client: Airtable REST client.
            base_id: Base holding Companies, Rendering Reports and
                Competitive Analysis.
            news_base_id: Base holding Brands, News Scores and News Monitor.
        """
        self._client = client
        self._base_id = base_id
        self._news_base_id = news_base_id

    def _to_company(self, record: AirtableRecord) -> AirtableCompany:
        fields = record.fields
        values = {
            attr: str(fields[column]) if fields.get(column) is not None else None
            for attr, column in COMPANY_FIELDS.items()
        }
        return AirtableCompany(
            id=record.id,
            name=values.pop("name") or "",
            type=values.pop("type") or "client",
            status=values.pop("status") or "active",
            created_time=_created_time(record),
            extra_fields=_extra(fields, set(COMPANY_FIELDS.values())),
            **values,
        )

    async def list_companies(self, table: str = "Companies") -> list[AirtableCompany]:
        """List companies from the CRM table."""
        records = await self._client.list_records(self._base_id, table)
        return [self._to_company(r) for r in records]

    async def get_company(
        self, record_id: str, table: str = "Companies"
    ) -> AirtableCompany | None:
        """Get one company by Airtable record ID."""
        record = await self._client.get_record(
            self._base_id, table, _ensure_record_id(record_id)
        )
        return self._to_company(record) if record else None

    async def list_rendering_reports(
        self, company_name: str | None = None
    ) -> list[RenderingReport]:
        """List rendering reports, optionally only those matching a company name."""
        records = await self._client.list_records(self._base_id, "Rendering Reports")
        known = (
            REPORT_COMPANY_FIELDS
            + REPORT_TRAFFIC_FIELDS
            + REPORT_KEYWORDS_FIELDS
            + REPORT_BACKLINKS_FIELDS
            + ("competitorScores",)
        )
        reports = [
            RenderingReport(
                id=r.id,
                company_name=str(_first(r.fields, REPORT_COMPANY_FIELDS) or ""),
                client_traffic=str(_first(r.fields, REPORT_TRAFFIC_FIELDS) or ""),
                client_keywords=str(_first(r.fields, REPORT_KEYWORDS_FIELDS) or ""),
                client_backlinks=str(_first(r.fields, REPORT_BACKLINKS_FIELDS) or ""),
                competitor_scores=_parse_competitor_scores(r.fields.get("competitorScores")),
                created_time=_created_time(r),
                extra_fields=_extra(r.fields, known),
            )
            for r in records
        ]
        if company_name:
            reports = [r for r in reports if match_company_name(r.company_name, company_name)]
            logger.debug("rendering_reports_filtered", company=company_name, count=len(reports))
        return reports

    async def list_competitive_analysis(
        self, company_name: str | None = None
    ) -> list[CompetitiveAnalysis]:
        """List competitive analyses with their JSON payload decoded.

        A record whose payload does not parse is kept with ``error`` set and
        the raw text in ``raw_data``.
        """
        records = await self._client.list_records(self._base_id, "Competitive Analysis")
        results: list[CompetitiveAnalysis] = []
        for r in records:
            name = str(r.fields.get("Company Name") or "")
            if company_name and not match_company_name(name, company_name):
                continue
            raw = r.fields.get("Raw JSON Response")
            if not raw:
                results.append(
                    CompetitiveAnalysis(id=r.id, company_name=name, created_time=_created_time(r))
                )
                continue
            try:
                parsed = json.loads(raw)
            except (TypeError, json.JSONDecodeError):
                logger.warning("competitive_analysis_unparseable", record_id=r.id, company=name)
                results.append(
                    CompetitiveAnalysis(
                        id=r.id,
                        company_name=name,
                        error="Failed to parse competitive analysis data",
                        raw_data=str(raw),
                        created_time=_created_time(r),
                    )
                )
                continue
            results.append(
                CompetitiveAnalysis(
                    id=r.id,
                    company_name=name,
                    competitor_analysis=parsed,
                    created_time=_created_time(r),
                    extra_fields=_extra(r.fields, ("Raw JSON Response", "Company Name")),
                )
            )
        return results

    async def list_brands(self) -> list[Brand]:
        """List brands tracked by news monitoring."""
        records = await self._client.list_records(self._news_base_id, "Brands")
        return [
            Brand(
                id=r.id,
                name=str(r.fields.get("Name") or ""),
                extra_fields=_extra(r.fields, ("Name",)),
            )
            for r in records
        ]

    async def list_news_scores(self, brand_ids: list[str] | None = None) -> list[NewsScore]:
        """Latest scored news articles, optionally restricted to some brands.

        Args:
            brand_ids: Airtable record IDs of brands. None means all brands;
                an empty list matches nothing.

        Returns:
            Up to four newest articles, scores scaled to 0-100.
        """
        if brand_ids is not None and not brand_ids:
            return []

        formula = None
        if brand_ids:
            clauses = [
                f'FIND("{_ensure_record_id(b)}", ARRAYJOIN({{Brands}}))' for b in brand_ids
            ]
            formula = f"OR({', '.join(clauses)})"

        scores = await self._client.list_records(
            self._news_base_id,
            "News Scores",
            max_records=NEWS_SCORES_LIMIT,
            sort=[("_createdTime", "desc")],
            filter_by_formula=formula,
        )

        monitor_ids = [
            link
            for r in scores
            for link in (r.fields.get("News Monitor") or [])
            if RECORD_ID_PATTERN.match(str(link))
        ]
        monitors: dict[str, AirtableRecord] = {}
        if monitor_ids:
            clauses = ", ".join(f"RECORD_ID() = '{m}'" for m in monitor_ids)
            linked = await self._client.list_records(
                self._news_base_id,
                "News Monitor",
                view=None,
                filter_by_formula=f"OR({clauses})",
            )
            monitors = {m.id: m for m in linked}

        known = (
            tuple(NEWS_SCORE_FIELDS.values())
            + tuple(NEWS_SCORE_METRICS.values())
            + ("News Monitor", "Brands", "Brand Name")
        )
        return [self._to_news_score(r, monitors, known) for r in scores]

    def _to_news_score(
        self,
        record: AirtableRecord,
        monitors: dict[str, AirtableRecord],
        known: tuple[str, ...],
    ) -> NewsScore:
        fields = record.fields
        links = fields.get("News Monitor") or []
        monitor = monitors.get(links[0]) if links else None
        article_url = ""
        publication_date = ""
        if monitor is not None:
            article_url = _first(monitor.fields, ("Article URL", "URL")) or ""
            publication_date = (
                _first(monitor.fields, ("Publication Date", "Publication date", "Created Date"))
                or _created_time(monitor)
            )

        brands = fields.get("Brands") or []
        text = {attr: str(fields.get(column) or "") for attr, column in NEWS_SCORE_FIELDS.items()}
        metrics = {attr: _scaled(fields.get(column)) for attr, column in NEWS_SCORE_METRICS.items()}
        return NewsScore(
            id=record.id,
            created_time=_created_time(record),
            article_url=str(article_url),
            publication_date=str(publication_date),
            brand_id=str(brands[0]) if brands else "",
            brand_name=str(fields.get("Brand Name") or ""),
            extra_fields=_extra(fields, known),
            **text,
            **metrics,
        )
