"""
退款仓储接口
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .entity import Refund, RefundStatus


class RefundRepository(ABC):
    """退款仓储抽象接口"""

    @abstractmethod
    async def create(self, refund: Refund) -> Refund:
        """创建退款记录"""
        pass

    @abstractmethod
    async def list_by_order_id(
        self,
        order_id: str,
        exclude_statuses: Optional[Iterable[RefundStatus]] = None,
    ) -> List[Refund]:
        """获取订单（经由订单交易）的全部退款，按创建时间倒序，附带订单信息"""
        pass
