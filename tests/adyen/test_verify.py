import pytest

from application.services.admin_service import AdyenAdminService
from application.utils.currency import CurrencyUtil
from infrastructure.external.payments import get_adyen_client
from infrastructure.external.payments.exceptions import PaymentProviderError


def _form(**values):
    return {f"AdyenPayment.config.{k}": v for k, v in values.items()}


@pytest.mark.asyncio
async def test_valid_credentials(admin_service, gateway, gateway_factory):
    result = await admin_service.check_credentials(
        _form(apiKeyTest="form_key", environment=False, merchantAccount="FormMerchant")
    )

    assert result.to_body() == {"success": True}
    assert gateway_factory.calls == [{"api_key": "form_key", "live": False, "live_endpoint_url_prefix": None}]
    assert gateway.payment_methods_calls == [{"merchantAccount": "FormMerchant"}]


@pytest.mark.asyncio
async def test_unsaved_values_fall_back_to_settings(admin_service, gateway, gateway_factory):
    result = await admin_service.check_credentials({})

    assert result.success is True
    assert gateway_factory.calls[0]["api_key"] is None
    assert gateway_factory.calls[0]["live"] is False
    assert gateway.payment_methods_calls == [{"merchantAccount": "TestMerchantECOM"}]


@pytest.mark.asyncio
@pytest.mark.parametrize("environment, live", [(True, True), ("1", True), ("live", True), ("", False), ("false", False)])
async def test_environment_switch(admin_service, gateway_factory, environment, live):
    await admin_service.check_credentials(_form(environment=environment, liveEndpointUrlPrefix="abc-Shop"))

    assert gateway_factory.calls[0]["live"] is live
    assert gateway_factory.calls[0]["live_endpoint_url_prefix"] == "abc-Shop"


@pytest.mark.asyncio
async def test_response_without_payment_methods(admin_service, gateway):
    gateway.payment_methods_response = {}

    result = await admin_service.check_credentials(_form(apiKeyTest="form_key"))

    assert result.to_body() == {"success": False, "message": "adyen.paymentMethodsMissing"}


@pytest.mark.asyncio
async def test_provider_error_message_is_returned(admin_service, gateway):
    gateway.error = PaymentProviderError("HTTP Status Response - Unauthorized", provider="adyen", provider_code="000")

    result = await admin_service.check_credentials(_form(apiKeyTest="wrong"))

    assert result.to_body() == {"success": False, "message": "HTTP Status Response - Unauthorized"}


@pytest.mark.asyncio
async def test_live_without_prefix_fails_before_any_request():
    service = AdyenAdminService(
        uow_factory=lambda **kw: None,
        gateway_factory=get_adyen_client,
        currency_util=CurrencyUtil(),
    )

    result = await service.check_credentials(_form(apiKeyTest="live_key", environment=True))

    assert result.success is False
    assert result.message == "Live endpoint URL prefix is required for the live environment"
