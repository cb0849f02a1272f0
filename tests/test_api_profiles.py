"""Tests for profile API endpoints."""

from httpx import AsyncClient

from dropcard.services.field_validator import EMAIL_INVALID


class TestProfiles:
    async def test_missing_profile(self, client: AsyncClient) -> None:
        response = await client.get("/profiles/user-123")

        assert response.status_code == 404

    async def test_put_creates_then_updates(self, client: AsyncClient) -> None:
        """PUT creates the profile on first use and edits it afterwards."""
        response = await client.put(
            "/profiles/user-123", json={"full_name": "Ann Lee", "email": "ann@lee.co"}
        )
        assert response.status_code == 200

        response = await client.put("/profiles/user-123", json={"full_name": "Ann Smith"})
        assert response.status_code == 200

        response = await client.get("/profiles/user-123")
        assert response.json() == {
            "user_id": "user-123",
            "full_name": "Ann Smith",
            "email": "ann@lee.co",
            "avatar_url": "",
        }

    async def test_invalid_email(self, client: AsyncClient) -> None:
        response = await client.put("/profiles/user-123", json={"email": "not-an-email"})

        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == {"email": EMAIL_INVALID}
        assert (await client.get("/profiles/user-123")).status_code == 404

    async def test_email_can_be_cleared(self, client: AsyncClient) -> None:
        await client.put("/profiles/user-123", json={"email": "ann@lee.co"})

        response = await client.put("/profiles/user-123", json={"email": ""})

        assert response.status_code == 200
        assert response.json()["email"] == ""
