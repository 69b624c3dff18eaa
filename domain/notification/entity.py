"""
Adyen 异步通知（webhook）记录实体
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from domain.order.entity import _ensure_utc


class NotificationStatus(str, Enum):
    PROCESSED = "processed"
    PENDING = "pending"


@dataclass
class Notification:
    id: Optional[int]
    psp_reference: str
    merchant_reference: str  # 订单号
    event_code: str
    success: bool
    amount_value: Optional[int] = None
    amount_currency: Optional[str] = None
    original_reference: Optional[str] = None
    payment_method: Optional[str] = None
    reason: Optional[str] = None
    done: bool = False
    processing: bool = False
    error_count: int = 0
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at)

    @property
    def status(self) -> NotificationStatus:
        return NotificationStatus.PROCESSED if self.done else NotificationStatus.PENDING

    @property
    def amount_display(self) -> str:
        value = "" if self.amount_value is None else str(self.amount_value)
        return f"{value} {self.amount_currency or ''}".strip()
