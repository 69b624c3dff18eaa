"""
Adyen 退款记录实体
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from domain.common.exceptions import DomainValidationException
from domain.order.entity import Order, _ensure_utc


class RefundStatus(str, Enum):
    """退款状态：提交后等待 Adyen 回调确认最终状态"""
    PENDING_WEBHOOK = "Pending Webhook"
    SUCCESS = "Success"
    FAILED = "Failed"


class RefundSource(str, Enum):
    """退款来源"""
    PLATFORM = "platform"  # 通过本服务（管理后台）发起
    ADYEN = "adyen"        # 在 Adyen 后台发起、经回调同步


@dataclass
class Refund:
    """
    退款记录

    金额以最小货币单位（如分）保存；order 仅在仓储预加载时可用。
    """

    id: Optional[int]
    order_transaction_id: str
    psp_reference: str
    source: RefundSource
    status: RefundStatus
    amount: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    order: Optional[Order] = None

    def __post_init__(self):
        if self.amount <= 0:
            raise DomainValidationException(
                f"退款金额必须大于0: {self.amount}",
                field="amount"
            )
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at)
