"""
Exception hierarchy.

Parsing and validation never raise; these cover lookups against the
store, where a missing row is a real failure the caller must handle.
"""


class DropCardError(Exception):
    """Base exception for all DropCard failures."""

    pass


class ContactNotFoundError(DropCardError):
    """Raised when a contact does not exist for the requesting user."""

    def __init__(self, contact_id: int, user_id: str) -> None:
        self.contact_id = contact_id
        self.user_id = user_id
        super().__init__(f"Contact {contact_id} not found for user '{user_id}'")


class CardNotFoundError(DropCardError):
    """Raised when a business card does not exist for the requesting user."""

    def __init__(self, card_id: int, user_id: str) -> None:
        self.card_id = card_id
        self.user_id = user_id
        super().__init__(f"Business card {card_id} not found for user '{user_id}'")


class FollowUpNotFoundError(DropCardError):
    """Raised when a follow-up does not exist for the requesting user."""

    def __init__(self, follow_up_id: int, user_id: str) -> None:
        self.follow_up_id = follow_up_id
        self.user_id = user_id
        super().__init__(f"Follow-up {follow_up_id} not found for user '{user_id}'")


class FollowUpGenerationError(DropCardError):
    """Raised when the message generator returns nothing usable."""

    pass
