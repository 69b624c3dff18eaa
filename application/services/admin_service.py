"""
Adyen admin use-cases: credential check, refund submission, refund and
notification listings.

Every operation is a pass-through to the repositories, the refund service and
the Adyen gateway. Request errors raise ``InvalidAdminRequestException``
(rendered as a plain-text 400); business rejections and provider failures
come back as ``ActionResultDTO(success=False, message=<code>)``.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, NoReturn, Optional

from application.dtos.adyen import (
    ActionResultDTO,
    NotificationViewDTO,
    RefundViewDTO,
    VerifyCredentialsDTO,
)
from application.ports.payment_gateway import AdyenGateway
from application.services.notification_service import NotificationService
from application.services.refund_service import RefundService
from application.utils.currency import CurrencyFormatter, CurrencyUtil
from application.utils.formatting import format_admin_datetime
from core.logging_config import get_logger
from core.settings import payment_settings
from domain.common.exceptions import InvalidAdminRequestException, OrderNotFoundException
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.notification.entity import Notification
from domain.order.entity import Order
from domain.refund.entity import Refund, RefundSource, RefundStatus
from infrastructure.external.payments.exceptions import PaymentProviderError
from shared.codes.payment_codes import AdminMessageCode


logger = get_logger(__name__)

GatewayFactory = Callable[..., AdyenGateway]


class AdyenAdminService:
    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork],
        gateway_factory: GatewayFactory,
        currency_formatter: Optional[CurrencyFormatter] = None,
        currency_util: Optional[CurrencyUtil] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._gateway_factory = gateway_factory
        self._currency_util = currency_util or CurrencyUtil()
        self._currency_formatter = currency_formatter or CurrencyFormatter(self._currency_util)

    # ------------------------------------------------------------------
    # Credential check
    # ------------------------------------------------------------------
    async def check_credentials(self, payload: Any) -> ActionResultDTO:
        """Call "list payment methods" with the posted (unsaved) configuration."""
        try:
            creds = VerifyCredentialsDTO.model_validate(payload or {})
            cfg = payment_settings.adyen
            live = cfg.is_live if creds.environment is None else creds.environment
            # None falls back to the persisted key for the selected environment
            gateway = self._gateway_factory(
                creds.api_key_test,
                live=live,
                live_endpoint_url_prefix=creds.live_endpoint_url_prefix,
            )
            result = await gateway.payment_methods(
                {"merchantAccount": creds.merchant_account or cfg.merchant_account}
            )
            has_payment_methods = "paymentMethods" in result
            logger.info("adyen_credentials_checked", live=live, success=has_payment_methods)
            if not has_payment_methods:
                return ActionResultDTO(success=False, message=AdminMessageCode.PAYMENT_METHODS_MISSING.value)
            return ActionResultDTO(success=True)
        except Exception as exc:
            logger.warning("adyen_credentials_check_failed", error=str(exc), error_type=type(exc).__name__)
            return ActionResultDTO(success=False, message=str(exc))

    # ------------------------------------------------------------------
    # Refund submission
    # ------------------------------------------------------------------
    async def post_refund(self, order_id: Optional[str], refund_amount: Optional[str]) -> ActionResultDTO:
        if not order_id:
            self._reject("Order Id was not provided in request", field="orderId")
        amount = self._parse_refund_amount(refund_amount)

        async with self._uow_factory(readonly=True) as uow:
            order = await uow.order_repository.get_order(order_id, ["transactions"])
            if order is None:
                self._reject(f"Unable to find order {order_id}", field="orderId")
            try:
                amount_minor = self._currency_util.sanitize(amount, order.currency_iso)
            except InvalidOperation:
                # more digits than the decimal context can quantize
                self._reject(f"Refund amount {refund_amount.strip()} is invalid", field="refundAmount")
            refundable = await RefundService(uow.refund_repository).is_amount_refundable(order, amount_minor)
        if not refundable:
            return ActionResultDTO(success=False, message=AdminMessageCode.INVALID_REFUND_AMOUNT.value)

        try:
            gateway = self._gateway_factory()
            async with self._uow_factory() as uow:
                refund_service = RefundService(uow.refund_repository, gateway, self._currency_util)
                result = await refund_service.refund(order, amount_minor)
                psp_reference = result.get("pspReference")
                if not psp_reference:
                    raise PaymentProviderError(
                        f"Invalid response for refund on order {order.order_number}",
                        provider="adyen",
                        details={"response": result},
                    )
                await refund_service.insert_adyen_refund(
                    order,
                    psp_reference,
                    RefundSource.PLATFORM,
                    RefundStatus.PENDING_WEBHOOK,
                    amount_minor,
                )
        except Exception as exc:
            logger.error(
                "adyen_refund_failed",
                order_id=order.id,
                order_number=order.order_number,
                amount=amount_minor,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return ActionResultDTO(success=False, message=AdminMessageCode.REFUND_ERROR.value)

        logger.info("adyen_refund_submitted", order_id=order.id, psp_reference=psp_reference, amount=amount_minor)
        return ActionResultDTO(success=True)

    def _parse_refund_amount(self, refund_amount: Optional[str]) -> Decimal:
        raw = (refund_amount or "").strip()
        if not raw:
            self._reject("Refund amount was not provided in request", field="refundAmount")
        try:
            amount = Decimal(raw)
        except InvalidOperation:
            self._reject(f"Refund amount {raw} is invalid", field="refundAmount")
        if not amount.is_finite() or amount < 0:
            self._reject(f"Refund amount {raw} is invalid", field="refundAmount")
        if amount == 0:
            self._reject("Refund amount was not provided in request", field="refundAmount")
        return amount

    @staticmethod
    def _reject(message: str, *, field: str) -> NoReturn:
        logger.error("adyen_refund_request_invalid", message=message, field=field)
        raise InvalidAdminRequestException(message, field=field)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    async def get_refunds(self, order_id: str) -> List[RefundViewDTO]:
        async with self._uow_factory(readonly=True) as uow:
            refunds = await uow.refund_repository.list_by_order_id(order_id)
        return self._build_refund_response_data(refunds)

    async def get_order_notifications(self, order_id: str) -> List[NotificationViewDTO]:
        async with self._uow_factory(readonly=True) as uow:
            order = await uow.order_repository.get_order(order_id)
            if order is None:
                raise OrderNotFoundException(order_id)
            # Notifications reference the order number, not the internal id
            notifications = await NotificationService(uow.notification_repository).get_all_notifications_by_order_number(
                order.order_number
            )
        return [self._notification_view(n) for n in notifications]

    def _build_refund_response_data(self, refunds: List[Refund]) -> List[RefundViewDTO]:
        return [
            RefundViewDTO(
                psp_reference=refund.psp_reference,
                amount=self._format_refund_amount(refund.amount, refund.order),
                raw_amount=refund.amount,
                status=refund.status.value,
                created_at=format_admin_datetime(refund.created_at),
                updated_at=format_admin_datetime(refund.updated_at),
            )
            for refund in refunds
        ]

    def _format_refund_amount(self, amount: int, order: Optional[Order]) -> str:
        if order is None:
            return str(amount)
        return self._currency_formatter.format_minor(amount, order.currency_iso, order.locale)

    @staticmethod
    def _notification_view(notification: Notification) -> NotificationViewDTO:
        return NotificationViewDTO(
            psp_reference=notification.psp_reference,
            event_code=notification.event_code,
            success=notification.success,
            amount=notification.amount_display,
            status=notification.status.value,
            created_at=format_admin_datetime(notification.created_at),
            updated_at=format_admin_datetime(notification.updated_at),
        )
