from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="WXDECK_")

    app_name: str = "WXDeck"
    debug: bool = False

    card_database_path: Path = DATA_DIR / "cards.json"

    # Source for the download job
    card_database_url: str | None = None

    # Optional keyword/class/name tables; raw string comparison when unset
    localization_path: Path | None = None

    # Banlist data for the format restriction check
    format_restriction_path: Path = DATA_DIR / "format_restriction.json"


settings = Settings()


# =============================================================================
# DECK CONSTRUCTION LIMITS
# =============================================================================

# A legal main deck has exactly this many cards
MAIN_DECK_SIZE = 40

# A legal LRIG deck has at most this many cards
LRIG_DECK_MAX = 10

# Exactly this many main deck cards must carry a life burst
BURST_COUNT = 20

# Copies allowed per canonical card
MAX_COPIES = 4

# Soft caps while editing or importing an incomplete deck
MAIN_DECK_SOFT_MAX = 50
LRIG_DECK_SOFT_MAX = 20
