"""Tests for the Airtable-backed analytics routes."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from agencyportal.adapters.airtable.types import AirtableCompany, Brand
from agencyportal.core.exceptions import UpstreamError, ValidationError

Headers = Callable[[str], dict[str, str]]

ACME_BRAND = "recBRANDACME00001"
GLOBEX_BRAND = "recBRANDGLOBEX001"


@pytest.fixture
def brands(airtable: MagicMock) -> list[Brand]:
    """Register two brands with the mock Airtable service."""
    result = [Brand(id=ACME_BRAND, name="ACME"), Brand(id=GLOBEX_BRAND, name="Globex")]
    airtable.list_brands.return_value = result
    return result


class TestAirtableCompanies:
    """Tests for /api/companies/airtable."""

    def test_staff_only(self, api_client: TestClient, auth_headers: Headers) -> None:
        """Client users are refused."""
        response = api_client.get("/api/companies/airtable", headers=auth_headers("viewer"))

        assert response.status_code == 403

    def test_not_shadowed_by_company_lookup(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """The static path wins over /companies/{company_id}."""
        airtable.list_companies.return_value = [
            AirtableCompany(
                id="recCOMPANY0000001",
                name="Acme Corp",
                zip_code="90210",
                created_time="2024-05-01T00:00:00.000Z",
            )
        ]

        response = api_client.get("/api/companies/airtable", headers=auth_headers("owner"))

        assert response.status_code == 200
        assert response.json()[0]["zipCode"] == "90210"
        assert response.json()[0]["extraFields"] == {}

    def test_upstream_failure(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Airtable failures become a 400 with a plain message."""
        airtable.list_companies.side_effect = UpstreamError("Failed to fetch data from Airtable")

        response = api_client.get("/api/companies/airtable", headers=auth_headers("owner"))

        assert response.status_code == 400
        assert response.json() == {"detail": "Failed to fetch data from Airtable"}


class TestAirtableCompany:
    """Tests for /api/companies/airtable/{record_id}."""

    def test_staff_get_company(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Staff read a single CRM company."""
        airtable.get_company.return_value = AirtableCompany(
            id="recCOMPANY0000001", name="Acme Corp"
        )

        response = api_client.get(
            "/api/companies/airtable/recCOMPANY0000001", headers=auth_headers("admin")
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Acme Corp"
        airtable.get_company.assert_awaited_once_with("recCOMPANY0000001")

    def test_client_refused(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Client users never reach Airtable."""
        response = api_client.get(
            "/api/companies/airtable/recCOMPANY0000001", headers=auth_headers("viewer")
        )

        assert response.status_code == 403
        airtable.get_company.assert_not_awaited()

    def test_unknown_record(self, api_client: TestClient, auth_headers: Headers) -> None:
        """Records Airtable does not know answer 404."""
        response = api_client.get(
            "/api/companies/airtable/recCOMPANY0000404", headers=auth_headers("owner")
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Company not found"}

    def test_malformed_record_id(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Invalid record IDs are a 400."""
        airtable.get_company.side_effect = ValidationError("Invalid Airtable record id: x")

        response = api_client.get("/api/companies/airtable/x", headers=auth_headers("owner"))

        assert response.status_code == 400


class TestCompanyScopedReports:
    """Tests for the company-name scoped endpoints."""

    def test_client_filtered_to_own_company(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Client users cannot widen the filter."""
        response = api_client.get(
            "/api/reports/rendering", params={"company": "Globex"}, headers=auth_headers("viewer")
        )

        assert response.status_code == 200
        airtable.list_rendering_reports.assert_awaited_once_with(company_name="Acme Corp")

    def test_staff_choose_company(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Staff filter by any company, or none."""
        api_client.get(
            "/api/reports/rendering", params={"company": "Globex"}, headers=auth_headers("admin")
        )
        api_client.get("/api/reports/rendering", headers=auth_headers("admin"))

        calls = airtable.list_rendering_reports.await_args_list
        assert [c.kwargs["company_name"] for c in calls] == ["Globex", None]

    def test_competitive_analysis_scoped(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Competitive analysis follows the caller's company."""
        response = api_client.get(
            "/api/companies/competitive-analysis", headers=auth_headers("editor")
        )

        assert response.status_code == 200
        airtable.list_competitive_analysis.assert_awaited_once_with(
            company_name="Globex Industries"
        )


class TestNewsMonitoring:
    """Tests for the news monitoring endpoints."""

    def test_client_sees_matching_brands(
        self, api_client: TestClient, auth_headers: Headers, brands: list[Brand]
    ) -> None:
        """Brands are matched on the caller's company name."""
        response = api_client.get("/api/news-monitoring/brands", headers=auth_headers("viewer"))

        assert [b["id"] for b in response.json()] == [ACME_BRAND]

    def test_staff_see_all_brands(
        self, api_client: TestClient, auth_headers: Headers, brands: list[Brand]
    ) -> None:
        """Staff see every brand."""
        response = api_client.get("/api/news-monitoring/brands", headers=auth_headers("owner"))

        assert len(response.json()) == 2

    def test_client_scores_limited_to_own_brands(
        self,
        api_client: TestClient,
        auth_headers: Headers,
        airtable: MagicMock,
        brands: list[Brand],
    ) -> None:
        """Without brandId a client gets its own brands' articles."""
        response = api_client.get("/api/news-monitoring/airtable", headers=auth_headers("viewer"))

        assert response.status_code == 200
        airtable.list_news_scores.assert_awaited_once_with([ACME_BRAND])

    def test_foreign_brand_denied(
        self,
        api_client: TestClient,
        auth_headers: Headers,
        airtable: MagicMock,
        brands: list[Brand],
    ) -> None:
        """Asking for another company's brand is a 403."""
        response = api_client.get(
            "/api/news-monitoring/airtable",
            params={"brandId": GLOBEX_BRAND},
            headers=auth_headers("viewer"),
        )

        assert response.status_code == 403
        airtable.list_news_scores.assert_not_awaited()

    def test_staff_pick_any_brand(
        self, api_client: TestClient, auth_headers: Headers, airtable: MagicMock
    ) -> None:
        """Staff query any brand, or all of them."""
        api_client.get(
            "/api/news-monitoring/airtable",
            params={"brandId": GLOBEX_BRAND},
            headers=auth_headers("admin"),
        )
        api_client.get("/api/news-monitoring/airtable", headers=auth_headers("admin"))

        calls = airtable.list_news_scores.await_args_list
        assert [c.args[0] for c in calls] == [[GLOBEX_BRAND], None]
