"""Tests for the access request routes."""

from __future__ import annotations

from collections.abc import Callable

from fastapi.testclient import TestClient

from tests.fixtures.repositories import InMemoryActivityLog, InMemoryPortalRepository

Headers = Callable[[str], dict[str, str]]


def _submit(api_client: TestClient, **overrides: str) -> dict:
    body = {
        "requesterEmail": "jane@example.com",
        "requesterName": "Jane Q Public",
        "requestedRole": "client_viewer",
        "companyId": "C1",
        "message": "Please let me in",
    }
    body.update(overrides)
    response = api_client.post("/api/access-requests", json=body)
    assert response.status_code == 201
    return response.json()


class TestAccessRequestRoutes:
    """Tests for /api/access-requests."""

    def test_submission_is_public(self, api_client: TestClient) -> None:
        """Anyone can ask for access."""
        body = _submit(api_client)

        assert body["status"] == "pending"
        assert body["reviewedBy"] is None

    def test_listing_requires_reviewer(
        self, api_client: TestClient, auth_headers: Headers
    ) -> None:
        """Client roles cannot see the queue."""
        response = api_client.get("/api/access-requests", headers=auth_headers("viewer"))

        assert response.status_code == 403

    def test_approval_creates_user(
        self,
        api_client: TestClient,
        auth_headers: Headers,
        seeded_repo: InMemoryPortalRepository,
        activity_log: InMemoryActivityLog,
    ) -> None:
        """Approving a request creates the account and empties the queue."""
        submitted = _submit(api_client)
        queue = api_client.get("/api/access-requests", headers=auth_headers("admin"))
        assert [r["id"] for r in queue.json()] == [submitted["id"]]

        response = api_client.patch(
            f"/api/access-requests/{submitted['id']}",
            json={"status": "approved"},
            headers=auth_headers("admin"),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "approved"
        assert body["reviewedBy"] == "admin"
        assert body["reviewedAt"] is not None

        created = [u for u in seeded_repo.users.values() if u.email == "jane@example.com"]
        assert len(created) == 1
        assert created[0].first_name == "Jane"
        assert created[0].last_name == "Q Public"
        assert created[0].company_id == "C1"
        assert created[0].password_hash is None
        assert "REVIEW_ACCESS_REQUEST" in activity_log.actions

        queue = api_client.get("/api/access-requests", headers=auth_headers("admin"))
        assert queue.json() == []

    def test_second_review_conflicts(
        self,
        api_client: TestClient,
        auth_headers: Headers,
        seeded_repo: InMemoryPortalRepository,
    ) -> None:
        """A request can be reviewed only once."""
        submitted = _submit(api_client)
        path = f"/api/access-requests/{submitted['id']}"
        first = api_client.patch(path, json={"status": "approved"}, headers=auth_headers("admin"))
        assert first.status_code == 200

        second = api_client.patch(path, json={"status": "approved"}, headers=auth_headers("owner"))

        assert second.status_code == 409
        assert sum(u.email == "jane@example.com" for u in seeded_repo.users.values()) == 1

    def test_deny_creates_nothing(
        self,
        api_client: TestClient,
        auth_headers: Headers,
        seeded_repo: InMemoryPortalRepository,
    ) -> None:
        """Denial closes the request without creating a user."""
        submitted = _submit(api_client)
        users_before = len(seeded_repo.users)

        response = api_client.patch(
            f"/api/access-requests/{submitted['id']}",
            json={"status": "denied"},
            headers=auth_headers("owner"),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "denied"
        assert len(seeded_repo.users) == users_before

    def test_company_override(
        self,
        api_client: TestClient,
        auth_headers: Headers,
        seeded_repo: InMemoryPortalRepository,
    ) -> None:
        """The reviewer can place the new user in another company."""
        submitted = _submit(api_client, companyId="")

        response = api_client.patch(
            f"/api/access-requests/{submitted['id']}",
            json={"status": "approved", "companyId": "C2"},
            headers=auth_headers("admin"),
        )

        assert response.status_code == 200
        created = next(u for u in seeded_repo.users.values() if u.email == "jane@example.com")
        assert created.company_id == "C2"

    def test_unknown_request(self, api_client: TestClient, auth_headers: Headers) -> None:
        """Reviewing a missing request is a 404."""
        response = api_client.patch(
            "/api/access-requests/nope",
            json={"status": "approved"},
            headers=auth_headers("admin"),
        )

        assert response.status_code == 404

    def test_pending_is_not_a_review(self, api_client: TestClient, auth_headers: Headers) -> None:
        """Only approved or denied are accepted."""
        submitted = _submit(api_client)

        response = api_client.patch(
            f"/api/access-requests/{submitted['id']}",
            json={"status": "pending"},
            headers=auth_headers("admin"),
        )

        assert response.status_code == 400
