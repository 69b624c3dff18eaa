"""
通知仓储接口
"""
from abc import ABC, abstractmethod
from typing import List

from .entity import Notification


class NotificationRepository(ABC):
    """通知仓储抽象接口"""

    @abstractmethod
    async def list_by_merchant_reference(self, merchant_reference: str) -> List[Notification]:
        """根据 merchantReference（订单号）获取通知，按创建时间倒序"""
        pass
