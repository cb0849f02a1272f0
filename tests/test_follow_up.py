"""Tests for follow-up message drafting."""

import pytest

from dropcard.models.contact import ContactRecord
from dropcard.models.errors import FollowUpGenerationError
from dropcard.services.follow_up import (
    TONE_INSTRUCTIONS,
    FollowUpTone,
    build_follow_up_prompt,
    generate_follow_up_message,
    resolve_tone,
)

ANN = ContactRecord(name="Ann Lee", title="CTO", company="Lee & Co")


class TestResolveTone:
    @pytest.mark.parametrize("tone", list(FollowUpTone))
    def test_known_tones(self, tone: FollowUpTone) -> None:
        assert resolve_tone(tone.value) is tone

    @pytest.mark.parametrize("tone", ["shouty", "", None, "Casual"])
    def test_unknown_falls_back_to_professional(self, tone: str | None) -> None:
        assert resolve_tone(tone) is FollowUpTone.PROFESSIONAL


class TestBuildFollowUpPrompt:
    def test_contact_details(self) -> None:
        prompt = build_follow_up_prompt(ANN, "Met at PyCon", FollowUpTone.CASUAL)

        assert prompt.startswith(
            "Generate a relaxed and conversational follow-up message for this contact:"
        )
        assert "- Name: Ann Lee" in prompt
        assert "- Title: CTO" in prompt
        assert "- Company: Lee & Co" in prompt
        assert "- Context: Met at PyCon" in prompt

    def test_missing_details(self) -> None:
        prompt = build_follow_up_prompt(ContactRecord(name="Bob"), "  ")

        assert "- Title: Not specified" in prompt
        assert "- Company: Not specified" in prompt
        assert "- Context: Recently connected" in prompt

    def test_every_tone_has_instruction(self) -> None:
        for tone, instruction in TONE_INSTRUCTIONS.items():
            assert f"Generate a {instruction} follow-up" in build_follow_up_prompt(ANN, tone=tone)
        assert set(TONE_INSTRUCTIONS) == set(FollowUpTone)

    def test_unknown_tone_reads_professional(self) -> None:
        prompt = build_follow_up_prompt(ANN, tone="sarcastic")

        assert "formal and business-appropriate" in prompt

    def test_requirements_numbered(self) -> None:
        lines = build_follow_up_prompt(ANN).splitlines()

        assert "1. References our recent meeting/connection" in lines
        assert "5. Sounds natural and human" in lines
        assert lines[-1] == "Return only the message text, no quotes or additional formatting."


class TestGenerateFollowUpMessage:
    async def test_returns_trimmed_message(self) -> None:
        prompts: list[str] = []

        async def generate(prompt: str) -> str:
            prompts.append(prompt)
            return "  Great meeting you, Ann!\n"

        message = await generate_follow_up_message(generate, ANN, "Met at PyCon")

        assert message == "Great meeting you, Ann!"
        assert prompts == [build_follow_up_prompt(ANN, "Met at PyCon")]

    @pytest.mark.parametrize("reply", ["", "   \n", None])
    async def test_blank_reply_raises(self, reply: str | None) -> None:
        async def generate(prompt: str) -> str | None:
            return reply

        with pytest.raises(FollowUpGenerationError, match="No message generated"):
            await generate_follow_up_message(generate, ANN)

    async def test_generator_errors_propagate(self) -> None:
        async def generate(prompt: str) -> str:
            raise ConnectionError("model unavailable")

        with pytest.raises(ConnectionError):
            await generate_follow_up_message(generate, ANN)
