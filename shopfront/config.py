import os
from dataclasses import dataclass
from pathlib import Path

from .constants import (
    API_BASE_URL_ENV,
    CURRENCIES,
    DATA_DIR,
    DEFAULT_API_BASE_URL,
    LOW_STOCK_THRESHOLD,
    SESSION_FILE_NAME,
)

BASE_DIR = Path(__file__).resolve().parent
DATA_PATH = Path(os.environ.get("SHOPFRONT_DATA_DIR") or (BASE_DIR / DATA_DIR))
SESSION_PATH = DATA_PATH / SESSION_FILE_NAME


def api_base_url() -> str:
    return (os.environ.get(API_BASE_URL_ENV) or DEFAULT_API_BASE_URL).rstrip("/")


@dataclass
class ShopSettings:
    """Shop preferences; kept in memory for the running session only."""
    shop_name: str = "MyShop Clothing Store"
    currency: str = "INR"
    low_stock_threshold: int = LOW_STOCK_THRESHOLD

    @property
    def currency_symbol(self) -> str:
        return CURRENCIES.get(self.currency, ("", ""))[1] or self.currency


SETTINGS = ShopSettings()
