"""
Adyen 通知仓储实现
"""
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.notification.entity import Notification
from domain.notification.repository import NotificationRepository
from infrastructure.models.adyen import AdyenNotificationModel


class SQLAlchemyNotificationRepository(NotificationRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: AdyenNotificationModel) -> Notification:
        return Notification(
            id=model.id,
            psp_reference=model.psp_reference,
            merchant_reference=model.merchant_reference,
            event_code=model.event_code,
            success=bool(model.success),
            amount_value=model.amount_value,
            amount_currency=model.amount_currency,
            original_reference=model.original_reference,
            payment_method=model.payment_method,
            reason=model.reason,
            done=bool(model.done),
            processing=bool(model.processing),
            error_count=model.error_count or 0,
            error_message=model.error_message,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def list_by_merchant_reference(self, merchant_reference: str) -> List[Notification]:
        result = await self.session.execute(
            select(AdyenNotificationModel)
            .where(AdyenNotificationModel.merchant_reference == merchant_reference)
            .order_by(AdyenNotificationModel.created_at.desc(), AdyenNotificationModel.id.desc())
        )
        return [self._to_entity(n) for n in result.scalars().all()]
