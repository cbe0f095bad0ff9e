import json
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .schemas import Settings

load_dotenv() # Optional: Load .env file

APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8002")) # Port for this service
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# JSON file with taxes and member discounts; unset means no taxes and no member discounts
PRICING_SETTINGS_PATH = os.getenv("PRICING_SETTINGS_PATH", "")


class SettingsError(Exception):
    """Raised when the configured settings file can't be read or is invalid."""


def load_settings(path: Optional[str] = None) -> Optional[Settings]:
    path = PRICING_SETTINGS_PATH if path is None else path
    if not path:
        return None
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise SettingsError(f"Invalid pricing settings in {path}: {e}") from e
