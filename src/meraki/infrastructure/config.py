"""
Configuration settings for the storefront.
"""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

from meraki.domain.model.value_objects import Money
from meraki.domain.service.order_composer import PricingPolicy

load_dotenv()

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings:
    """Settings loaded from environment variables.

    Read when the object is created, not at import time, so a test can
    set variables and build a fresh instance.
    """

    def __init__(self) -> None:
        # Storage
        self.DATABASE_URL: str = os.getenv(
            "MERAKI_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'meraki.db'}"
        )
        self.CART_FILE: Path = Path(
            os.getenv("MERAKI_CART_FILE", str(_DATA_DIR / "cart.json"))
        )

        # Pricing
        self.TAX_RATE: Decimal = Decimal(os.getenv("MERAKI_TAX_RATE", "0.18"))
        self.SHIPPING_FEE: Decimal = Decimal(os.getenv("MERAKI_SHIPPING_FEE", "499"))
        self.FREE_SHIPPING_THRESHOLD: Decimal = Decimal(
            os.getenv("MERAKI_FREE_SHIPPING_THRESHOLD", "4000")
        )
        self.DEFAULT_UNIT_PRICE: int = int(os.getenv("MERAKI_DEFAULT_UNIT_PRICE", "1249"))

        # Hand-off and tracking
        self.WHATSAPP_NUMBER: str = os.getenv("MERAKI_WHATSAPP_NUMBER", "+919789909362")
        self.TRACKING_URL: str | None = os.getenv("MERAKI_TRACKING_URL") or None
        self.TRACKING_TIMEOUT: float = float(os.getenv("MERAKI_TRACKING_TIMEOUT", "2"))

        # Admin
        self.JWT_SECRET: str = os.getenv("MERAKI_JWT_SECRET", "change-me")
        self.TOKEN_TTL_HOURS: int = int(os.getenv("MERAKI_TOKEN_TTL_HOURS", "24"))
        self.ADMIN_EMAIL: str = os.getenv("MERAKI_ADMIN_EMAIL", "admin@meraki.com")
        self.ADMIN_PASSWORD: str = os.getenv("MERAKI_ADMIN_PASSWORD", "admin123")
        self.ADMIN_NAME: str = os.getenv("MERAKI_ADMIN_NAME", "Admin User")
        self.BCRYPT_ROUNDS: int = int(os.getenv("MERAKI_BCRYPT_ROUNDS", "12"))

        self.LOG_LEVEL: str = os.getenv("MERAKI_LOG_LEVEL", "WARNING").upper()

    @property
    def log_level(self) -> int:
        level = getattr(logging, self.LOG_LEVEL, None)
        return level if isinstance(level, int) else logging.WARNING

    @property
    def pricing_policy(self) -> PricingPolicy:
        return PricingPolicy(
            tax_rate=self.TAX_RATE,
            shipping_fee=Money(self.SHIPPING_FEE),
            free_shipping_threshold=Money(self.FREE_SHIPPING_THRESHOLD),
            default_unit_price=self.DEFAULT_UNIT_PRICE,
        )
