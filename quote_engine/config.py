"""
Configuration for the quote engine and wizard.

Values come from environment variables (optionally a .env file loaded with
python-dotenv) and fall back to the defaults used in production.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "plans.csv"

# Operator that does not underwrite individual policies for unaccompanied minors
DEFAULT_RESTRICTED_OPERATOR = "fênix"
DEFAULT_RESTRICTED_OPERATOR_DISPLAY = "Fênix Medical"

LIMIT_WARNING_SECONDS = 3.0

_TRUE_VALUES = {"1", "true", "yes", "on", "sim"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class QuoteConfig:
    """Runtime settings for catalog loading, business rules and the UI."""
    catalog_path: Path = DEFAULT_CATALOG_PATH
    restricted_operator: str = DEFAULT_RESTRICTED_OPERATOR
    restricted_operator_display: str = DEFAULT_RESTRICTED_OPERATOR_DISPLAY
    limit_warning_seconds: float = LIMIT_WARNING_SECONDS
    # Show reference offers for a group quote made only of minors (progression stays blocked)
    group_solo_minor_offers: bool = False
    contact_whatsapp: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "QuoteConfig":
        """Load configuration from environment variables."""
        catalog_path = os.getenv("QUOTE_CATALOG_PATH")
        warning_seconds = os.getenv("QUOTE_LIMIT_WARNING_SECONDS")

        seconds = LIMIT_WARNING_SECONDS
        if warning_seconds:
            try:
                seconds = float(warning_seconds)
            except ValueError:
                logger.warning(
                    f"Invalid QUOTE_LIMIT_WARNING_SECONDS={warning_seconds!r}, using {LIMIT_WARNING_SECONDS}"
                )

        return cls(
            catalog_path=Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH,
            restricted_operator=os.getenv("QUOTE_RESTRICTED_OPERATOR", DEFAULT_RESTRICTED_OPERATOR),
            restricted_operator_display=os.getenv(
                "QUOTE_RESTRICTED_OPERATOR_DISPLAY", DEFAULT_RESTRICTED_OPERATOR_DISPLAY
            ),
            limit_warning_seconds=seconds,
            group_solo_minor_offers=_env_flag("QUOTE_GROUP_SOLO_MINOR_OFFERS"),
            contact_whatsapp=os.getenv("QUOTE_CONTACT_WHATSAPP", ""),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> Tuple[bool, str]:
        """Validate configuration. Returns (is_valid, error_message)."""
        if not Path(self.catalog_path).is_file():
            return False, f"Plan catalog not found: {self.catalog_path}"
        if not self.restricted_operator.strip():
            return False, "QUOTE_RESTRICTED_OPERATOR must not be empty"
        if self.limit_warning_seconds <= 0:
            return False, "QUOTE_LIMIT_WARNING_SECONDS must be positive"
        if not isinstance(logging.getLevelName(self.log_level), int):
            return False, f"Unknown LOG_LEVEL: {self.log_level}"
        return True, ""


_config: Optional[QuoteConfig] = None


def get_config() -> QuoteConfig:
    """Process-wide configuration, loaded from the environment on first use."""
    global _config
    if _config is None:
        _config = QuoteConfig.from_environment()
    return _config
