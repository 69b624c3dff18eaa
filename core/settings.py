"""
Payment-related settings using pydantic-settings v2 with nested env keys.

Kept apart from core.config.Settings so provider credentials live in one
place, e.g. ADYEN__API_KEY_TEST / ADYEN__MERCHANT_ACCOUNT.
"""
from __future__ import annotations

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field


class AdyenSettings(BaseModel):
    api_key_test: Optional[str] = None
    api_key_live: Optional[str] = None
    environment: Literal["test", "live"] = "test"
    live_endpoint_url_prefix: Optional[str] = None
    merchant_account: Optional[str] = None
    # seconds, passed to the SDK http client
    timeout: int = 30

    @property
    def is_live(self) -> bool:
        return self.environment == "live"

    @property
    def api_key(self) -> Optional[str]:
        return self.api_key_live if self.is_live else self.api_key_test


class PaymentSettings(BaseSettings):
    adyen: AdyenSettings = Field(default_factory=AdyenSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


payment_settings = PaymentSettings()
