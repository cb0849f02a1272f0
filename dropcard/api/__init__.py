from dropcard.api.cards import router as cards_router
from dropcard.api.contacts import router as contacts_router
from dropcard.api.follow_ups import router as follow_ups_router
from dropcard.api.health import router as health_router
from dropcard.api.profiles import router as profiles_router
from dropcard.api.scan import router as scan_router
from dropcard.api.validate import router as validate_router

__all__ = [
    "cards_router",
    "contacts_router",
    "follow_ups_router",
    "health_router",
    "profiles_router",
    "scan_router",
    "validate_router",
]
