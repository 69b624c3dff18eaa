"""
订单仓储接口
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .entity import Order


class OrderRepository(ABC):
    """订单仓储抽象接口"""

    @abstractmethod
    async def get_order(self, order_id: str, associations: Sequence[str] = ()) -> Optional[Order]:
        """根据ID获取订单，associations 指定需要预加载的关联（如 "transactions"）"""
        pass
