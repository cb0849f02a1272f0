"""Tests for scan intake API endpoints."""

import json

import pytest
from httpx import AsyncClient

from dropcard.api.scan import INVALID_CODE_MESSAGE
from dropcard.config import settings


class TestDecode:
    async def test_card_payload(self, client: AsyncClient) -> None:
        """A DropCard payload decodes with a contact preview."""
        text = json.dumps({"name": "Jane", "email": "jane@x.com", "type": "dropcard"})

        response = await client.post("/scan/decode", json={"text": text})

        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "json"
        assert data["is_card"] is True
        assert data["contact"]["name"] == "Jane"
        assert data["contact"]["tags"] == ["scanned"]

    async def test_vcard(self, client: AsyncClient, sample_vcard: str) -> None:
        response = await client.post("/scan/decode", json={"text": sample_vcard})

        data = response.json()
        assert data["kind"] == "vcard"
        assert data["is_card"] is True
        assert data["record"]["company"] == "Acme Corp"
        assert data["contact"]["tags"] == ["scanned"]
        assert data["contact"]["metadata"]["linkedin"] == "https://linkedin.com/in/janesmith"

    async def test_json_without_contact_fields(self, client: AsyncClient) -> None:
        """JSON from another app decodes but is not a card."""
        response = await client.post("/scan/decode", json={"text": '{"ssid": "cafe"}'})

        data = response.json()
        assert data["kind"] == "json"
        assert data["is_card"] is False
        assert data["contact"] is None

    async def test_raw_text(self, client: AsyncClient) -> None:
        """Unrecognized content is returned, never rejected."""
        response = await client.post("/scan/decode", json={"text": "https://example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "raw"
        assert data["is_card"] is False
        assert data["text"] == "https://example.com"


class TestSaveScannedContact:
    async def test_save_card_payload(self, client: AsyncClient) -> None:
        text = json.dumps({"name": "Jane", "email": "jane@x.com", "title": "CTO"})

        response = await client.post("/scan/user-123/contacts", json={"text": text})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Jane"
        assert data["title"] == "CTO"
        assert data["tags"] == ["scanned"]
        assert data["notes"].startswith("Added via QR scan on ")

        listed = (await client.get("/contacts/user-123")).json()
        assert [contact["name"] for contact in listed["contacts"]] == ["Jane"]

    async def test_save_vcard(self, client: AsyncClient, sample_vcard: str) -> None:
        response = await client.post("/scan/user-123/contacts", json={"text": sample_vcard})

        assert response.status_code == 201
        assert response.json()["tags"] == ["scanned"]
        assert "Address: 123 Main St" in response.json()["notes"]

    async def test_rejects_non_card(self, client: AsyncClient) -> None:
        response = await client.post("/scan/user-123/contacts", json={"text": "hello"})

        assert response.status_code == 422
        assert response.json()["detail"] == INVALID_CODE_MESSAGE
        assert (await client.get("/contacts/user-123")).json()["contacts"] == []


class TestOcrPreview:
    async def test_preview(self, client: AsyncClient) -> None:
        """An OCR reply becomes a business-card contact preview."""
        reply = 'Sure! {"name": "Bob Lee", "email": "bob@x.com", "twitter": "@bob"}'

        response = await client.post("/scan/ocr", json={"response_text": reply})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Bob Lee"
        assert data["tags"] == ["business-card"]
        assert data["metadata"] == {"twitter": "@bob"}
        assert "Twitter: @bob" in data["notes"]

    async def test_unparseable_reply(self, client: AsyncClient) -> None:
        response = await client.post("/scan/ocr", json={"response_text": "too blurry"})

        data = response.json()
        assert data["name"] == "Extracted Contact"
        assert "Notes: too blurry" in data["notes"]

    async def test_disabled(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "enable_camera_ocr", False)

        response = await client.post("/scan/ocr", json={"response_text": "{}"})

        assert response.status_code == 404
