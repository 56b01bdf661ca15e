"""Tests for chirp endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from chirpy.services.auth import TokenKind, TokenService

pytestmark = pytest.mark.asyncio


async def _post_chirp(client: AsyncClient, headers: dict[str, str], body: str) -> dict:
    response = await client.post("/api/chirps", json={"body": body}, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestCreateChirp:
    """Tests for POST /api/chirps."""

    async def test_create_chirp(self, async_client: AsyncClient, test_user, auth_headers):
        """Test that the author comes from the token."""
        response = await async_client.post(
            "/api/chirps",
            json={"body": "If you're committed enough, you can make any story work."},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json() == {
            "id": 1,
            "body": "If you're committed enough, you can make any story work.",
            "author_id": test_user.id,
        }

    async def test_profanity_masked(self, async_client: AsyncClient, auth_headers):
        data = await _post_chirp(
            async_client, auth_headers, "I hear Mastodon is better. Kerfuffle indeed Fornax!"
        )

        assert data["body"] == "I hear Mastodon is better. **** indeed Fornax!"

    async def test_at_length_limit(self, async_client: AsyncClient, auth_headers):
        data = await _post_chirp(async_client, auth_headers, "x" * 140)

        assert len(data["body"]) == 140

    async def test_too_long(self, async_client: AsyncClient, auth_headers, db):
        """Test that bodies over 140 characters are rejected and not stored."""
        response = await async_client.post(
            "/api/chirps", json={"body": "x" * 141}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Chirp is too long"
        assert db.load().chirps == {}

    async def test_requires_token(self, async_client: AsyncClient):
        response = await async_client.post("/api/chirps", json={"body": "hello"})

        assert response.status_code == 401

    async def test_expired_token(self, async_client: AsyncClient, ledger, test_user):
        token = TokenService(ledger, access_lifetime=timedelta(seconds=-1)).issue(
            TokenKind.ACCESS, test_user.id
        )

        response = await async_client.post(
            "/api/chirps", json={"body": "hello"}, headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"


class TestReadChirps:
    """Tests for GET /api/chirps and GET /api/chirps/{id}."""

    async def test_list_empty(self, async_client: AsyncClient):
        response = await async_client.get("/api/chirps")

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_sorted(self, async_client: AsyncClient, auth_headers):
        """Test ascending by default and descending on request."""
        for body in ("one", "two", "three"):
            await _post_chirp(async_client, auth_headers, body)

        asc = await async_client.get("/api/chirps")
        desc = await async_client.get("/api/chirps", params={"sort": "desc"})
        other = await async_client.get("/api/chirps", params={"sort": "sideways"})

        assert [c["id"] for c in asc.json()] == [1, 2, 3]
        assert [c["id"] for c in desc.json()] == [3, 2, 1]
        assert [c["id"] for c in other.json()] == [1, 2, 3]

    async def test_filter_by_author(
        self, async_client: AsyncClient, auth_headers, user_service, token_service
    ):
        bob = user_service.create("bob@example.com", "pw")
        bob_headers = {
            "Authorization": f"Bearer {token_service.issue(TokenKind.ACCESS, bob.id)}"
        }
        await _post_chirp(async_client, auth_headers, "alice 1")
        await _post_chirp(async_client, bob_headers, "bob 1")
        await _post_chirp(async_client, auth_headers, "alice 2")

        response = await async_client.get("/api/chirps", params={"author_id": bob.id})

        assert [c["body"] for c in response.json()] == ["bob 1"]

    async def test_non_integer_author_ignored(self, async_client: AsyncClient, auth_headers):
        await _post_chirp(async_client, auth_headers, "hello")

        response = await async_client.get("/api/chirps", params={"author_id": "abc"})

        assert response.status_code == 200
        assert len(response.json()) == 1

    async def test_get_by_id(self, async_client: AsyncClient, auth_headers):
        created = await _post_chirp(async_client, auth_headers, "hello")

        response = await async_client.get(f"/api/chirps/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_get_missing(self, async_client: AsyncClient):
        response = await async_client.get("/api/chirps/42")

        assert response.status_code == 404

    async def test_get_non_integer_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/chirps/abc")

        assert response.status_code == 422


class TestDeleteChirp:
    """Tests for DELETE /api/chirps/{id}."""

    async def test_author_deletes(self, async_client: AsyncClient, auth_headers):
        created = await _post_chirp(async_client, auth_headers, "bye")

        response = await async_client.delete(
            f"/api/chirps/{created['id']}", headers=auth_headers
        )

        assert response.status_code == 204
        assert (await async_client.get(f"/api/chirps/{created['id']}")).status_code == 404

    async def test_other_user_forbidden(
        self, async_client: AsyncClient, auth_headers, user_service, token_service
    ):
        created = await _post_chirp(async_client, auth_headers, "mine")
        bob = user_service.create("bob@example.com", "pw")
        bob_headers = {
            "Authorization": f"Bearer {token_service.issue(TokenKind.ACCESS, bob.id)}"
        }

        response = await async_client.delete(
            f"/api/chirps/{created['id']}", headers=bob_headers
        )

        assert response.status_code == 403
        assert (await async_client.get(f"/api/chirps/{created['id']}")).status_code == 200

    async def test_missing(self, async_client: AsyncClient, auth_headers):
        response = await async_client.delete("/api/chirps/42", headers=auth_headers)

        assert response.status_code == 404

    async def test_requires_token(self, async_client: AsyncClient, auth_headers):
        created = await _post_chirp(async_client, auth_headers, "mine")

        response = await async_client.delete(f"/api/chirps/{created['id']}")

        assert response.status_code == 401

    async def test_ids_not_reused(self, async_client: AsyncClient, auth_headers):
        await _post_chirp(async_client, auth_headers, "one")
        second = await _post_chirp(async_client, auth_headers, "two")
        await async_client.delete(f"/api/chirps/{second['id']}", headers=auth_headers)

        third = await _post_chirp(async_client, auth_headers, "three")

        assert third["id"] == 3


async def test_end_to_end_session(async_client: AsyncClient):
    """Sign up, log in, post, refresh, revoke and log in again."""
    signup = await async_client.post(
        "/api/users", json={"email": "saul@bettercall.com", "password": "123456"}
    )
    assert signup.status_code == 201
    user_id = signup.json()["id"]

    login = await async_client.post(
        "/api/login", json={"email": "saul@bettercall.com", "password": "123456"}
    )
    assert login.status_code == 200
    tokens = login.json()

    chirp = await async_client.post(
        "/api/chirps",
        json={"body": "Let's just say I know a guy who knows a guy who knows another guy."},
        headers={"Authorization": f"Bearer {tokens['token']}"},
    )
    assert chirp.status_code == 201
    assert chirp.json()["author_id"] == user_id

    refresh_headers = {"Authorization": f"Bearer {tokens['refresh_token']}"}
    refreshed = await async_client.post("/api/refresh", headers=refresh_headers)
    assert refreshed.status_code == 200

    listing = await async_client.get("/api/chirps", params={"author_id": user_id})
    assert len(listing.json()) == 1

    assert (await async_client.post("/api/revoke", headers=refresh_headers)).status_code == 204
    assert (await async_client.post("/api/refresh", headers=refresh_headers)).status_code == 401

    # The access token minted before revocation stays valid until it expires
    delete = await async_client.delete(
        f"/api/chirps/{chirp.json()['id']}",
        headers={"Authorization": f"Bearer {refreshed.json()['token']}"},
    )
    assert delete.status_code == 204
