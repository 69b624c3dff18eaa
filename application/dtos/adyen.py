"""
Adyen admin DTOs (Pydantic v2) used at application boundaries.

Response views serialize with camelCase aliases, which is what the admin
UI consumes.
"""
from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Admin configuration form keys are sent as "<namespace>.<name>"
CONFIG_NAMESPACE = "AdyenPayment.config"

_FALSY_STRINGS = {"", "0", "false", "no", "off", "test"}


def _config_key(name: str) -> str:
    return f"{CONFIG_NAMESPACE}.{name}"


class VerifyCredentialsDTO(BaseModel):
    """Unsaved admin configuration posted to the verify action.

    Fields left as None fall back to the persisted settings.
    """

    api_key_test: Optional[str] = Field(default=None, alias=_config_key("apiKeyTest"))
    environment: Optional[bool] = Field(default=None, alias=_config_key("environment"))
    live_endpoint_url_prefix: Optional[str] = Field(default=None, alias=_config_key("liveEndpointUrlPrefix"))
    merchant_account: Optional[str] = Field(default=None, alias=_config_key("merchantAccount"))

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("environment", mode="before")
    @classmethod
    def _truthy_environment(cls, v: Any) -> Optional[bool]:
        # The admin form sends a switch value; anything truthy selects live.
        if v is None:
            return None
        if isinstance(v, str):
            return v.strip().lower() not in _FALSY_STRINGS
        return bool(v)

    @field_validator("api_key_test", "live_endpoint_url_prefix", "merchant_account", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class ActionResultDTO(BaseModel):
    success: bool
    message: Optional[str] = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class _ViewBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class RefundViewDTO(_ViewBase):
    psp_reference: str
    amount: str
    raw_amount: int
    status: str
    created_at: str
    updated_at: str


class NotificationViewDTO(_ViewBase):
    psp_reference: str
    event_code: str
    success: bool
    amount: str
    status: str
    created_at: str
    updated_at: str
