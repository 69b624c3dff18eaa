"""In-memory doubles for the Adyen admin service tests."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence

import pytest

from application.services.admin_service import AdyenAdminService
from application.utils.currency import CurrencyFormatter, CurrencyUtil
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.notification.entity import Notification
from domain.notification.repository import NotificationRepository
from domain.order.entity import Order, OrderTransaction
from domain.order.repository import OrderRepository
from domain.refund.entity import Refund, RefundSource, RefundStatus
from domain.refund.repository import RefundRepository


UTC = timezone.utc


class InMemoryStore:
    def __init__(self) -> None:
        self.orders: dict[str, Order] = {}
        self.refunds: List[Refund] = []
        self.notifications: List[Notification] = []
        self.commits = 0
        self.rollbacks = 0

    def add_order(self, order: Order) -> Order:
        self.orders[order.id] = order
        return order

    def add_refund(self, order: Order, amount: int, status: RefundStatus, **kwargs: Any) -> Refund:
        tx = order.latest_adyen_transaction()
        refund = Refund(
            id=len(self.refunds) + 1,
            order_transaction_id=tx.id if tx else "tx-unknown",
            psp_reference=kwargs.pop("psp_reference", f"REFUND-{len(self.refunds) + 1}"),
            source=kwargs.pop("source", RefundSource.PLATFORM),
            status=status,
            amount=amount,
            order=order,
            **kwargs,
        )
        self.refunds.append(refund)
        return refund


class FakeOrderRepository(OrderRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_order(self, order_id: str, associations: Sequence[str] = ()) -> Optional[Order]:
        return self.store.orders.get(order_id)


class FakeRefundRepository(RefundRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def create(self, refund: Refund) -> Refund:
        refund.id = len(self.store.refunds) + 1
        refund.created_at = refund.created_at or datetime.now(UTC)
        self.store.refunds.append(refund)
        return refund

    async def list_by_order_id(
        self,
        order_id: str,
        exclude_statuses: Optional[Iterable[RefundStatus]] = None,
    ) -> List[Refund]:
        excluded = set(exclude_statuses or [])
        rows = [
            r for r in self.store.refunds
            if r.order is not None and r.order.id == order_id and r.status not in excluded
        ]
        oldest = datetime.min.replace(tzinfo=UTC)
        return sorted(rows, key=lambda r: r.created_at or oldest, reverse=True)


class FailingRefundRepository(FakeRefundRepository):
    async def create(self, refund: Refund) -> Refund:
        raise RuntimeError("insert failed")


class FakeNotificationRepository(NotificationRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_by_merchant_reference(self, merchant_reference: str) -> List[Notification]:
        rows = [n for n in self.store.notifications if n.merchant_reference == merchant_reference]
        oldest = datetime.min.replace(tzinfo=UTC)
        return sorted(rows, key=lambda n: n.created_at or oldest, reverse=True)


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: InMemoryStore, *, readonly: bool = False) -> None:
        super().__init__(readonly=readonly)
        self.store = store
        self.order_repository = FakeOrderRepository(store)
        self.refund_repository = FakeRefundRepository(store)
        self.notification_repository = FakeNotificationRepository(store)

    async def commit(self) -> None:
        self.store.commits += 1
        self._committed = True

    async def rollback(self) -> None:
        self.store.rollbacks += 1


class FakeGateway:
    provider = "adyen"

    def __init__(self) -> None:
        self.payment_methods_response: dict[str, Any] = {"paymentMethods": [{"type": "scheme", "name": "Cards"}]}
        self.refund_response: dict[str, Any] = {"pspReference": "REFUND-PSP-1", "status": "received"}
        self.error: Optional[Exception] = None
        self.payment_methods_calls: List[dict] = []
        self.refund_calls: List[dict] = []

    async def payment_methods(self, params: dict[str, Any]) -> dict[str, Any]:
        self.payment_methods_calls.append(params)
        if self.error:
            raise self.error
        return self.payment_methods_response

    async def refund(
        self,
        payment_psp_reference: str,
        params: dict[str, Any],
        *,
        idempotency_key: Optional[str] = None,
    ) -> dict[str, Any]:
        self.refund_calls.append(
            {"psp_reference": payment_psp_reference, "params": params, "idempotency_key": idempotency_key}
        )
        if self.error:
            raise self.error
        return self.refund_response


class RecordingGatewayFactory:
    def __init__(self, gateway: FakeGateway) -> None:
        self.gateway = gateway
        self.calls: List[dict] = []

    def __call__(self, api_key: Optional[str] = None, **kwargs: Any) -> FakeGateway:
        self.calls.append({"api_key": api_key, **kwargs})
        return self.gateway


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def order(store: InMemoryStore) -> Order:
    return store.add_order(
        Order(
            id="order-1",
            order_number="10001",
            currency_iso="EUR",
            amount_total=Decimal("100.00"),
            locale="en_GB",
            created_at=datetime(2024, 5, 1, 9, 0, tzinfo=UTC),
            transactions=[
                OrderTransaction(
                    id="tx-1",
                    order_id="order-1",
                    amount_total=Decimal("100.00"),
                    psp_reference="PAYMENT-PSP-1",
                    payment_method="scheme",
                    created_at=datetime(2024, 5, 1, 9, 5, tzinfo=UTC),
                )
            ],
        )
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def gateway_factory(gateway: FakeGateway) -> RecordingGatewayFactory:
    return RecordingGatewayFactory(gateway)


@pytest.fixture
def admin_service(store: InMemoryStore, gateway_factory: RecordingGatewayFactory) -> AdyenAdminService:
    currency_util = CurrencyUtil()
    return AdyenAdminService(
        uow_factory=lambda **kw: FakeUnitOfWork(store, **kw),
        gateway_factory=gateway_factory,
        currency_formatter=CurrencyFormatter(currency_util, default_locale="en_US"),
        currency_util=currency_util,
    )


@pytest.fixture
def refund_repository(store: InMemoryStore) -> FakeRefundRepository:
    return FakeRefundRepository(store)


@pytest.fixture
def failing_insert_service(store: InMemoryStore, gateway_factory: RecordingGatewayFactory) -> AdyenAdminService:
    def uow_factory(**kw: Any) -> FakeUnitOfWork:
        uow = FakeUnitOfWork(store, **kw)
        uow.refund_repository = FailingRefundRepository(store)
        return uow

    return AdyenAdminService(uow_factory=uow_factory, gateway_factory=gateway_factory)
