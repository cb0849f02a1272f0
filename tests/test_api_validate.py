"""Tests for form validation endpoints."""

from httpx import AsyncClient


class TestValidateContact:
    async def test_valid(self, client: AsyncClient) -> None:
        response = await client.post(
            "/validate/contact",
            json={"name": "Ann", "email": "ann@x.com", "phone": "(555) 123-4567"},
        )

        assert response.status_code == 200
        assert response.json() == {"valid": True, "errors": {}}

    async def test_optional_fields_may_be_blank(self, client: AsyncClient) -> None:
        response = await client.post("/validate/contact", json={"name": "Ann"})

        assert response.json()["valid"] is True

    async def test_errors_per_field(self, client: AsyncClient) -> None:
        response = await client.post(
            "/validate/contact",
            json={"name": "", "email": "ann@x", "website": "example"},
        )

        assert response.json() == {
            "valid": False,
            "errors": {
                "name": "Name is required",
                "email": "Please enter a valid email address",
                "website": "Please enter a valid website URL",
            },
        }


class TestValidateCard:
    async def test_email_required(self, client: AsyncClient) -> None:
        response = await client.post("/validate/card", json={"name": "Ann"})

        assert response.json() == {"valid": False, "errors": {"email": "Email is required"}}

    async def test_valid(self, client: AsyncClient) -> None:
        response = await client.post(
            "/validate/card",
            json={"name": "Ann", "email": "ann@x.com", "website": "www.ann.dev"},
        )

        assert response.json() == {"valid": True, "errors": {}}
