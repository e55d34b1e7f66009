"""Tests for the Airtable mapping service."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from agencyportal.adapters.airtable.service import AirtableService, match_company_name
from agencyportal.adapters.airtable.types import AirtableRecord
from agencyportal.core.exceptions import ValidationError

BRAND_ID = "recBRAND000000001"
MONITOR_ID = "recMONITOR0000001"


def _record(record_id: str, **fields) -> AirtableRecord:
    return AirtableRecord(id=record_id, created_time="2024-05-01T00:00:00.000Z", fields=fields)


@pytest.fixture
def client() -> MagicMock:
    """Return a mock Airtable client."""
    mock = MagicMock()
    mock.list_records = AsyncMock(return_value=[])
    mock.get_record = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def service(client: MagicMock) -> AirtableService:
    """Return a service over the mock client."""
    return AirtableService(client, base_id="appMain", news_base_id="appNews")


class TestMatchCompanyName:
    """Tests for match_company_name."""

    @pytest.mark.parametrize(
        ("candidate", "target"),
        [
            ("Acme Corp", "acme corp"),
            ("Acme, Inc.", "acme inc"),
            ("AcmeCorp", "Acme Corp"),
            ("Acme", "Acme Corp"),
            ("Globex Industries Holdings", "Globex Industries"),
        ],
    )
    def test_matches(self, candidate: str, target: str) -> None:
        """Variants of the same name match."""
        assert match_company_name(candidate, target)

    @pytest.mark.parametrize(
        ("candidate", "target"),
        [
            ("Initech", "Acme Corp"),
            ("", "Acme Corp"),
            ("Acme Corp", ""),
            ("!!!", "Acme"),
        ],
    )
    def test_does_not_match(self, candidate: str, target: str) -> None:
        """Unrelated or empty names do not match."""
        assert not match_company_name(candidate, target)


class TestCompanies:
    """Tests for company mapping."""

    async def test_maps_known_and_extra_fields(
        self, service: AirtableService, client: MagicMock
    ) -> None:
        """Known columns become typed fields and the rest is kept."""
        client.list_records.return_value = [
            _record("recCOMPANY0000001", Name="Acme Corp", Website="acme.test", Tier="Gold")
        ]

        companies = await service.list_companies()

        assert companies[0].name == "Acme Corp"
        assert companies[0].website == "acme.test"
        assert companies[0].type == "client"
        assert companies[0].extra_fields == {"Tier": "Gold"}
        client.list_records.assert_awaited_once_with("appMain", "Companies")

    async def test_get_company_rejects_malformed_id(self, service: AirtableService) -> None:
        """Record IDs are validated before use."""
        with pytest.raises(ValidationError):
            await service.get_company("not-a-record")

    async def test_get_company_unknown(self, service: AirtableService) -> None:
        """Unknown records give None."""
        assert await service.get_company("recCOMPANY0000001") is None


class TestRenderingReports:
    """Tests for rendering reports."""

    async def test_filters_by_company_name(
        self, service: AirtableService, client: MagicMock
    ) -> None:
        """Only reports whose company matches are returned."""
        client.list_records.return_value = [
            _record(
                "recREPORT00000001",
                Company="Acme Corporation",
                client_traffic=1200,
                competitorScores=json.dumps([{"name": "Globex", "score": 3}]),
            ),
            _record("recREPORT00000002", Company="Initech"),
        ]

        reports = await service.list_rendering_reports(company_name="Acme")

        assert [r.id for r in reports] == ["recREPORT00000001"]
        assert reports[0].client_traffic == "1200"
        assert reports[0].competitor_scores == [{"name": "Globex", "score": 3}]

    async def test_unparseable_competitor_scores(
        self, service: AirtableService, client: MagicMock
    ) -> None:
        """Bad JSON yields an empty score list."""
        client.list_records.return_value = [
            _record("recREPORT00000001", Company="Acme", competitorScores="{oops")
        ]

        reports = await service.list_rendering_reports()

        assert reports[0].competitor_scores == []


class TestCompetitiveAnalysis:
    """Tests for competitive analysis decoding."""

    async def test_decodes_payload(self, service: AirtableService, client: MagicMock) -> None:
        """The raw JSON response is decoded."""
        client.list_records.return_value = [
            _record(
                "recANALYSIS000001",
                **{"Company Name": "Acme", "Raw JSON Response": '{"competitors": ["Globex"]}'},
            )
        ]

        [analysis] = await service.list_competitive_analysis()

        assert analysis.competitor_analysis == {"competitors": ["Globex"]}
        assert analysis.error is None

    async def test_unparseable_payload_is_kept(
        self, service: AirtableService, client: MagicMock
    ) -> None:
        """A record that does not parse is returned with an error."""
        client.list_records.return_value = [
            _record(
                "recANALYSIS000001",
                **{"Company Name": "Acme", "Raw JSON Response": "not json"},
            )
        ]

        [analysis] = await service.list_competitive_analysis()

        assert analysis.error == "Failed to parse competitive analysis data"
        assert analysis.raw_data == "not json"
        assert analysis.competitor_analysis is None


class TestNewsScores:
    """Tests for news score listing."""

    async def test_empty_brand_list_matches_nothing(
        self, service: AirtableService, client: MagicMock
    ) -> None:
        """No brands means no query."""
        assert await service.list_news_scores([]) == []
        client.list_records.assert_not_awaited()

    async def test_rejects_malformed_brand_id(self, service: AirtableService) -> None:
        """Brand IDs are validated before they reach a formula."""
        with pytest.raises(ValidationError):
            await service.list_news_scores(['x") OR TRUE() OR ("'])

    async def test_scales_scores_and_joins_monitor(
        self, service: AirtableService, client: MagicMock
    ) -> None:
        """Scores become 0-100 integers and the article URL comes from News Monitor."""
        score = _record(
            "recSCORE000000001",
            Title="Acme wins award",
            **{
                "Sentiment Score": 0.82,
                "TotalScore": "0.5",
                "Brands": [BRAND_ID],
                "Brand Name": "Acme",
                "News Monitor": [MONITOR_ID],
                "Reach": 1000,
            },
        )
        monitor = _record(
            MONITOR_ID,
            **{"Article URL": "https://news.test/acme", "Publication Date": "2024-04-30"},
        )
        client.list_records.side_effect = [[score], [monitor]]

        [news] = await service.list_news_scores([BRAND_ID])

        assert news.title == "Acme wins award"
        assert news.sentiment_score == 82
        assert news.total_score == 50
        assert news.relevance_score == 0
        assert news.article_url == "https://news.test/acme"
        assert news.publication_date == "2024-04-30"
        assert news.brand_id == BRAND_ID
        assert news.extra_fields == {"Reach": 1000}

        score_call = client.list_records.await_args_list[0]
        assert score_call.kwargs["max_records"] == 4
        assert score_call.kwargs["sort"] == [("_createdTime", "desc")]
        assert BRAND_ID in score_call.kwargs["filter_by_formula"]
        monitor_call = client.list_records.await_args_list[1]
        assert monitor_call.args[1] == "News Monitor"
        assert monitor_call.kwargs["view"] is None

    async def test_all_brands_has_no_formula(
        self, service: AirtableService, client: MagicMock
    ) -> None:
        """brand_ids=None queries every brand."""
        await service.list_news_scores()

        assert client.list_records.await_args.kwargs["filter_by_formula"] is None
