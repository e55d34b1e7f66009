"""Airtable REST client."""

from collections.abc import Callable
from typing import Any

import httpx
import pydantic
import structlog

from agencyportal.adapters.airtable.types import AirtableRecord
from agencyportal.core.exceptions import UpstreamError

logger = structlog.get_logger()

AIRTABLE_API_URL = "https://api.airtable.com/v0"
DEFAULT_VIEW = "Grid view"

TokenProvider = Callable[[], str | None]


class AirtableClient:
    """Reads records from Airtable bases.

    The bearer token is pulled from ``token_provider`` on every request, so a
    rotated key takes effect without rebuilding the client.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = AIRTABLE_API_URL,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            token_provider: Returns the API key to send as bearer token.
            http_client: Shared HTTP client. One is created when omitted.
            base_url: Airtable API root.
            timeout_seconds: Per-request timeout.
        """
        self._token_provider = token_provider
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        token = self._token_provider()
        if not token:
            raise UpstreamError("Airtable is not configured")
        return {"Authorization": f"Bearer {token}"}

    async def _get(self, path: str, params: list[tuple[str, Any]]) -> dict[str, Any]:
        headers = self._headers()
        try:
            response = await self._http.get(
                f"{self._base_url}/{path}",
                params=params,
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.error("airtable_request_failed", path=path, error=str(e))
            raise UpstreamError("Failed to fetch data from Airtable") from e
        except ValueError as e:
            logger.error("airtable_response_not_json", path=path, error=str(e))
            raise UpstreamError("Failed to fetch data from Airtable") from e

        if not isinstance(payload, dict):
            logger.error("airtable_response_not_object", path=path)
            raise UpstreamError("Failed to fetch data from Airtable")
        return payload

    def _to_record(self, raw: Any) -> AirtableRecord:
        try:
            return AirtableRecord.model_validate(raw)
        except pydantic.ValidationError as e:
            logger.error("airtable_record_invalid", error=str(e))
            raise UpstreamError("Failed to fetch data from Airtable") from e

    async def list_records(
        self,
        base_id: str,
        table: str,
        view: str | None = DEFAULT_VIEW,
        max_records: int | None = None,
        sort: list[tuple[str, str]] | None = None,
        filter_by_formula: str | None = None,
    ) -> list[AirtableRecord]:
        """List all records of a table, following pagination.

        Args:
            base_id: Airtable base ID.
            table: Table name.
            view: View whose filters and ordering apply.
            max_records: Upper bound on records returned.
            sort: (field, "asc" | "desc") pairs.
            filter_by_formula: Airtable formula selecting records.

        Returns:
            Records in Airtable order.

        Raises:
            UpstreamError: If Airtable is unreachable or answers with an error.
        """
        params: list[tuple[str, Any]] = []
        if view:
            params.append(("view", view))
        if max_records is not None:
            params.append(("maxRecords", max_records))
        if filter_by_formula:
            params.append(("filterByFormula", filter_by_formula))
        for i, (field, direction) in enumerate(sort or []):
            params.append((f"sort[{i}][field]", field))
            params.append((f"sort[{i}][direction]", direction))

        records: list[AirtableRecord] = []
        offset: str | None = None
        while True:
            page_params = params + ([("offset", offset)] if offset else [])
            payload = await self._get(f"{base_id}/{table}", page_params)
            records.extend(self._to_record(r) for r in payload.get("records") or [])
            offset = payload.get("offset")
            if not offset:
                break

        logger.debug("airtable_records_listed", table=table, count=len(records))
        return records

    async def get_record(self, base_id: str, table: str, record_id: str) -> AirtableRecord | None:
        """Get a single record, or None when Airtable does not know it."""
        try:
            payload = await self._get(f"{base_id}/{table}/{record_id}", [])
        except UpstreamError as e:
            cause = e.__cause__
            if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
                return None
            raise
        return self._to_record(payload)
