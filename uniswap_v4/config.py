"""
Configuration settings for position planning

Loads environment variables and provides defaults for range construction.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Position planning settings"""

    # Range construction
    DEFAULT_TICK_SPACING: int = int(os.getenv("UNISWAP_TICK_SPACING", 60))
    DEFAULT_RANGE_OFFSET: int = int(os.getenv("UNISWAP_RANGE_OFFSET", 10))

    # Clamp aligned ticks into the usable tick range before minting
    CLAMP_TICK_RANGE: bool = os.getenv("UNISWAP_CLAMP_TICK_RANGE", "True").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


# Create global settings instance
settings = Settings()
