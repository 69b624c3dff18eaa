"""Read access to stored Adyen notifications."""
from __future__ import annotations

from typing import List

from domain.notification.entity import Notification
from domain.notification.repository import NotificationRepository


class NotificationService:
    def __init__(self, notification_repository: NotificationRepository) -> None:
        self.notification_repository = notification_repository

    async def get_all_notifications_by_order_number(self, order_number: str) -> List[Notification]:
        return await self.notification_repository.list_by_merchant_reference(order_number)
