from datetime import datetime, timezone
from decimal import Decimal

import pytest

from domain.common.exceptions import OrderNotFoundException
from domain.notification.entity import Notification
from domain.order.entity import Order
from domain.refund.entity import Refund, RefundSource, RefundStatus


UTC = timezone.utc


@pytest.mark.asyncio
async def test_refunds_are_listed_newest_first_with_display_values(admin_service, store, order):
    store.add_refund(
        order, 1050, RefundStatus.SUCCESS,
        psp_reference="REF-OLD",
        created_at=datetime(2024, 5, 2, 12, 30, tzinfo=UTC),
        updated_at=datetime(2024, 5, 2, 12, 45, tzinfo=UTC),
    )
    store.add_refund(
        order, 200, RefundStatus.PENDING_WEBHOOK,
        psp_reference="REF-NEW",
        created_at=datetime(2024, 5, 3, 8, 0, tzinfo=UTC),
    )

    views = await admin_service.get_refunds("order-1")

    assert [v.psp_reference for v in views] == ["REF-NEW", "REF-OLD"]
    assert views[1].to_body() == {
        "pspReference": "REF-OLD",
        "amount": "€10.50",
        "rawAmount": 1050,
        "status": "Success",
        "createdAt": "2024-05-02 12:30 (UTC)",
        "updatedAt": "2024-05-02 12:45 (UTC)",
    }
    assert views[0].status == "Pending Webhook"
    assert views[0].updated_at == "-"


@pytest.mark.asyncio
async def test_failed_refunds_are_still_listed(admin_service, store, order):
    store.add_refund(order, 500, RefundStatus.FAILED, created_at=datetime(2024, 5, 2, tzinfo=UTC))

    views = await admin_service.get_refunds("order-1")

    assert [v.status for v in views] == ["Failed"]


@pytest.mark.asyncio
async def test_refunds_for_unknown_order_are_empty(admin_service, store, order):
    store.add_refund(order, 500, RefundStatus.SUCCESS)

    assert await admin_service.get_refunds("other-order") == []


def test_refund_without_order_falls_back_to_raw_amount(admin_service):
    refund = Refund(
        id=1,
        order_transaction_id="tx-1",
        psp_reference="REF-1",
        source=RefundSource.ADYEN,
        status=RefundStatus.SUCCESS,
        amount=990,
    )

    views = admin_service._build_refund_response_data([refund])

    assert views[0].amount == "990"
    assert views[0].created_at == "-"


@pytest.mark.asyncio
async def test_refund_amount_uses_order_locale(admin_service, store):
    order = store.add_order(
        Order(id="order-us", order_number="30001", currency_iso="USD", amount_total=Decimal("50"), locale="en_US")
    )
    store.refunds.append(
        Refund(
            id=1,
            order_transaction_id="tx-us",
            psp_reference="REF-US",
            source=RefundSource.PLATFORM,
            status=RefundStatus.SUCCESS,
            amount=123456,
            order=order,
        )
    )

    views = await admin_service.get_refunds("order-us")

    assert views[0].amount == "$1,234.56"


@pytest.mark.asyncio
async def test_notifications_are_matched_by_order_number(admin_service, store, order):
    store.notifications.extend(
        [
            Notification(
                id=1,
                psp_reference="PAYMENT-PSP-1",
                merchant_reference="10001",
                event_code="AUTHORISATION",
                success=True,
                amount_value=10000,
                amount_currency="EUR",
                done=True,
                created_at=datetime(2024, 5, 1, 9, 6, tzinfo=UTC),
                updated_at=datetime(2024, 5, 1, 9, 7, tzinfo=UTC),
            ),
            Notification(
                id=2,
                psp_reference="REFUND-PSP-1",
                merchant_reference="10001",
                event_code="REFUND",
                success=False,
                created_at=datetime(2024, 5, 2, 10, 0, tzinfo=UTC),
            ),
            Notification(
                id=3,
                psp_reference="OTHER",
                merchant_reference="99999",
                event_code="AUTHORISATION",
                success=True,
                created_at=datetime(2024, 5, 2, 10, 0, tzinfo=UTC),
            ),
        ]
    )

    views = await admin_service.get_order_notifications("order-1")

    assert [v.to_body() for v in views] == [
        {
            "pspReference": "REFUND-PSP-1",
            "eventCode": "REFUND",
            "success": False,
            "amount": "",
            "status": "pending",
            "createdAt": "2024-05-02 10:00 (UTC)",
            "updatedAt": "-",
        },
        {
            "pspReference": "PAYMENT-PSP-1",
            "eventCode": "AUTHORISATION",
            "success": True,
            "amount": "10000 EUR",
            "status": "processed",
            "createdAt": "2024-05-01 09:06 (UTC)",
            "updatedAt": "2024-05-01 09:07 (UTC)",
        },
    ]


@pytest.mark.asyncio
async def test_notifications_for_unknown_order_raise(admin_service):
    with pytest.raises(OrderNotFoundException) as exc_info:
        await admin_service.get_order_notifications("missing")
    assert exc_info.value.details == {"order_id": "missing"}


@pytest.mark.asyncio
async def test_order_without_notifications_lists_nothing(admin_service, order):
    assert await admin_service.get_order_notifications("order-1") == []
