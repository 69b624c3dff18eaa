"""
Factory for payment gateway clients.
"""
from __future__ import annotations

from typing import Optional

from core.settings import payment_settings
from application.ports.payment_gateway import AdyenGateway


def get_adyen_client(
    api_key: Optional[str] = None,
    *,
    live: Optional[bool] = None,
    live_endpoint_url_prefix: Optional[str] = None,
) -> AdyenGateway:
    """Build an Adyen client; arguments left as None come from persisted settings."""
    from .adyen_client import AdyenCheckoutClient

    cfg = payment_settings.adyen
    is_live = cfg.is_live if live is None else live
    if api_key is None:
        api_key = cfg.api_key_live if is_live else cfg.api_key_test
    return AdyenCheckoutClient(
        api_key=api_key,
        live=is_live,
        live_endpoint_url_prefix=live_endpoint_url_prefix or cfg.live_endpoint_url_prefix,
    )
