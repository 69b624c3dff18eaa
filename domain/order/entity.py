"""
订单领域实体 - 订单由电商平台维护，这里只保留退款与通知查询需要的字段
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from domain.common.exceptions import DomainValidationException


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """确保时间为 UTC 时区"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class OrderTransaction:
    """订单支付交易；psp_reference 为 Adyen 侧已捕获支付的引用"""

    id: str
    order_id: str
    amount_total: Decimal
    psp_reference: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        self.created_at = _ensure_utc(self.created_at)

    @property
    def is_adyen_payment(self) -> bool:
        return bool(self.psp_reference)


@dataclass
class Order:
    """
    订单聚合（只读视图）

    order_number 是面向用户的订单号，Adyen 通知中的 merchantReference 即为该值；
    id 是平台内部主键。
    """

    id: str
    order_number: str
    currency_iso: str  # ISO-4217
    amount_total: Decimal
    locale: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    transactions: List[OrderTransaction] = field(default_factory=list)

    def __post_init__(self):
        if not self.currency_iso or len(self.currency_iso) != 3 or not self.currency_iso.isalpha():
            raise DomainValidationException(
                f"无效的货币代码: {self.currency_iso}",
                field="currency_iso"
            )
        self.currency_iso = self.currency_iso.upper()
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at)

    def latest_adyen_transaction(self) -> Optional[OrderTransaction]:
        """最近一笔带 Adyen 引用的交易（退款基于它发起）"""
        candidates = [tx for tx in self.transactions if tx.is_adyen_payment]
        if not candidates:
            return None
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        return max(candidates, key=lambda tx: tx.created_at or oldest)
