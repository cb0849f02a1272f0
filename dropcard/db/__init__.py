from dropcard.db.database import get_session, init_db
from dropcard.db.operations import (
    card_to_dict,
    contact_to_record,
    create_card,
    create_contact,
    create_follow_up,
    delete_card,
    delete_contact,
    delete_follow_up,
    follow_up_to_dict,
    get_card,
    get_contact,
    get_contacts_by_tag,
    get_follow_up,
    get_primary_card,
    get_profile,
    get_user_cards,
    get_user_follow_ups,
    list_contacts,
    profile_to_dict,
    search_contacts_db,
    set_primary_card,
    update_card,
    update_contact,
    update_follow_up,
    update_profile,
)

__all__ = [
    "card_to_dict",
    "contact_to_record",
    "create_card",
    "create_contact",
    "create_follow_up",
    "delete_card",
    "delete_contact",
    "delete_follow_up",
    "follow_up_to_dict",
    "get_card",
    "get_contact",
    "get_contacts_by_tag",
    "get_follow_up",
    "get_primary_card",
    "get_profile",
    "get_session",
    "get_user_cards",
    "get_user_follow_ups",
    "init_db",
    "list_contacts",
    "profile_to_dict",
    "search_contacts_db",
    "set_primary_card",
    "update_card",
    "update_contact",
    "update_follow_up",
    "update_profile",
]
