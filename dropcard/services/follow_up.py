"""
Follow-up message drafting.

The text generator (a language model) is an external collaborator. This
module builds the prompt it receives from a contact, the meeting context
and a tone, and cleans up what comes back.
"""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from dropcard.models.contact import ContactRecord
from dropcard.models.errors import FollowUpGenerationError

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
DEFAULT_CONTEXT = "Recently connected"


class FollowUpTone(str, Enum):
    """Register of a follow-up message."""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    FRIENDLY = "friendly"


TONE_INSTRUCTIONS: dict[FollowUpTone, str] = {
    FollowUpTone.PROFESSIONAL: "formal and business-appropriate",
    FollowUpTone.CASUAL: "relaxed and conversational",
    FollowUpTone.FRIENDLY: "warm and approachable while maintaining professionalism",
}

_MESSAGE_REQUIREMENTS: tuple[str, ...] = (
    "References our recent meeting/connection",
    "Mentions something specific about their role or company if available",
    "Suggests a next step (meeting, call, or collaboration)",
    "Keeps it concise (2-3 sentences max)",
    "Sounds natural and human",
)

MessageGenerator = Callable[[str], Awaitable[str]]


def resolve_tone(tone: FollowUpTone | str | None) -> FollowUpTone:
    """Tone by value; anything unrecognized reads as professional."""
    try:
        return FollowUpTone(tone)
    except ValueError:
        logger.debug("follow_up_tone_unknown", extra={"tone": tone})
        return FollowUpTone.PROFESSIONAL


def build_follow_up_prompt(
    contact: ContactRecord,
    context: str = "",
    tone: FollowUpTone | str = FollowUpTone.PROFESSIONAL,
) -> str:
    """
    Prompt asking for a short personalized follow-up to a contact.

    Missing title and company read "Not specified"; a blank context reads
    "Recently connected".
    """
    instruction = TONE_INSTRUCTIONS[resolve_tone(tone)]
    lines = [
        f"Generate a {instruction} follow-up message for this contact:",
        "",
        "Contact Information:",
        f"- Name: {contact.name}",
        f"- Title: {contact.title or NOT_SPECIFIED}",
        f"- Company: {contact.company or NOT_SPECIFIED}",
        f"- Context: {(context or '').strip() or DEFAULT_CONTEXT}",
        "",
        "Create a personalized follow-up message that:",
    ]
    lines.extend(f"{number}. {item}" for number, item in enumerate(_MESSAGE_REQUIREMENTS, 1))
    lines.append("")
    lines.append("Return only the message text, no quotes or additional formatting.")
    return "\n".join(lines)


async def generate_follow_up_message(
    generate: MessageGenerator,
    contact: ContactRecord,
    context: str = "",
    tone: FollowUpTone | str = FollowUpTone.PROFESSIONAL,
) -> str:
    """
    Draft a follow-up message with the text generator.

    Args:
        generate: Async callable taking a prompt and returning generated text
        contact: Contact the message is addressed to
        context: Notes about the meeting
        tone: One of the FollowUpTone values

    Returns:
        The generated message, trimmed.

    Raises:
        FollowUpGenerationError: If the generator returns blank text.
        Errors raised by the generator propagate unchanged.
    """
    prompt = build_follow_up_prompt(contact, context, tone)
    try:
        reply = await generate(prompt)
    except Exception:
        logger.exception("follow_up_generation_failed")
        raise

    message = reply.strip() if isinstance(reply, str) else ""
    if not message:
        raise FollowUpGenerationError("No message generated")

    logger.info("follow_up_generated", extra={"length": len(message)})
    return message
