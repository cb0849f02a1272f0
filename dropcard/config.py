from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DROPCARD_")

    app_name: str = "DropCard"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./dropcard.db"

    # Feature flags consumed by the API layer (the core never reads them)
    # Saving a rendered QR code to the device is not available yet
    enable_save_qr: bool = False
    # Business card intake from AI OCR results
    enable_camera_ocr: bool = True

    # Longest serialized QR payload that still scans reliably
    qr_max_payload_bytes: int = 2000

    # Name placed on a card payload when the card has none
    default_card_name: str = "DropCard User"


settings = Settings()


# =============================================================================
# CARD AND CONTACT DEFAULTS
# =============================================================================

# Type marker embedded in every QR payload we produce
CARD_PAYLOAD_TYPE = "dropcard"

# Name used when a scanned or extracted contact carries no usable name
UNKNOWN_CONTACT_NAME = "Unknown Contact"

# Default theme color for newly created business cards
DEFAULT_THEME_COLOR = "#000000"
