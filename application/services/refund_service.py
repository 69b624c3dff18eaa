"""
Refund use-cases backing the admin refund endpoint.

Depends on the refund repository and the AdyenGateway port; the composition
root (API dependencies) injects both.
"""
from __future__ import annotations

import hashlib
from typing import Any, Optional

from application.ports.payment_gateway import AdyenGateway
from application.utils.currency import CurrencyUtil
from core.logging_config import get_logger
from core.settings import payment_settings
from domain.common.exceptions import RefundNotPossibleException
from domain.order.entity import Order, OrderTransaction
from domain.refund.entity import Refund, RefundSource, RefundStatus
from domain.refund.repository import RefundRepository


logger = get_logger(__name__)


def _refund_idempotency_key(order: Order, transaction: OrderTransaction, amount: int, existing_refunds: int) -> str:
    # Stable across retries of the same request, distinct for a further refund of the same amount
    base = f"refund|{order.id}|{transaction.psp_reference}|{amount}|{order.currency_iso}|{existing_refunds}"
    return hashlib.sha256(base.encode("utf-8")).hexdigest()


class RefundService:
    def __init__(
        self,
        refund_repository: RefundRepository,
        gateway: Optional[AdyenGateway] = None,
        currency_util: Optional[CurrencyUtil] = None,
        merchant_account: Optional[str] = None,
    ) -> None:
        self.refund_repository = refund_repository
        self.gateway = gateway
        self.currency_util = currency_util or CurrencyUtil()
        self.merchant_account = merchant_account or payment_settings.adyen.merchant_account

    async def is_amount_refundable(self, order: Order, amount: int) -> bool:
        """True when ``amount`` (minor units) fits in the order's remaining balance.

        Failed refunds do not count towards the refunded total.
        """
        if amount <= 0:
            return False
        refunds = await self.refund_repository.list_by_order_id(
            order.id, exclude_statuses=[RefundStatus.FAILED]
        )
        refunded = sum(r.amount for r in refunds)
        order_amount = self.currency_util.sanitize(order.amount_total, order.currency_iso)
        refundable = order_amount >= refunded + amount
        logger.info(
            "adyen_refund_amount_checked",
            order_id=order.id,
            amount=amount,
            refunded=refunded,
            order_amount=order_amount,
            refundable=refundable,
        )
        return refundable

    async def refund(self, order: Order, amount: int) -> dict[str, Any]:
        """Send the refund to Adyen and return its raw response."""
        if self.gateway is None:
            raise RuntimeError("RefundService.refund requires a payment gateway")
        transaction = self._get_adyen_transaction(order)
        existing = await self.refund_repository.list_by_order_id(order.id)
        params = {
            "merchantAccount": self.merchant_account,
            "amount": {"value": amount, "currency": order.currency_iso},
            "reference": order.order_number,
        }
        logger.info(
            "adyen_refund_request",
            order_id=order.id,
            order_number=order.order_number,
            payment_psp_reference=transaction.psp_reference,
            amount=amount,
        )
        result = await self.gateway.refund(
            transaction.psp_reference,
            params,
            idempotency_key=_refund_idempotency_key(order, transaction, amount, len(existing)),
        )
        logger.info(
            "adyen_refund_response",
            order_id=order.id,
            psp_reference=result.get("pspReference"),
            status=result.get("status"),
        )
        return result

    async def insert_adyen_refund(
        self,
        order: Order,
        psp_reference: str,
        source: RefundSource,
        status: RefundStatus,
        amount: int,
    ) -> Refund:
        transaction = self._get_adyen_transaction(order)
        return await self.refund_repository.create(
            Refund(
                id=None,
                order_transaction_id=transaction.id,
                psp_reference=psp_reference,
                source=source,
                status=status,
                amount=amount,
                order=order,
            )
        )

    def _get_adyen_transaction(self, order: Order) -> OrderTransaction:
        transaction = order.latest_adyen_transaction()
        if transaction is None:
            raise RefundNotPossibleException(order.order_number, "no captured Adyen transaction")
        return transaction
