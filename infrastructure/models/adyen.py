"""
Adyen 退款与通知数据库模型
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Index
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .base import Base


class AdyenRefundModel(Base):
    """
    退款记录

    金额为最小货币单位；状态在提交后为 Pending Webhook，由回调处理器更新
    """
    __tablename__ = "adyen_refunds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_transaction_id = Column(
        String(36),
        ForeignKey("order_transactions.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联订单交易ID"
    )
    psp_reference = Column(String(64), nullable=False, comment="Adyen 退款引用")
    source = Column(String(16), nullable=False, comment="来源: platform/adyen")
    status = Column(String(32), nullable=False, comment="状态: Pending Webhook/Success/Failed")
    amount = Column(Integer, nullable=False, comment="退款金额（最小货币单位）")

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="创建时间"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=lambda: datetime.now(timezone.utc),
        comment="更新时间"
    )

    order_transaction = relationship("OrderTransactionModel", back_populates="refunds", lazy="raise")

    __table_args__ = (
        Index("ix_adyen_refunds_order_transaction_id", "order_transaction_id"),
        Index("ix_adyen_refunds_psp_reference", "psp_reference"),
    )

    def __repr__(self):
        return (
            f"<AdyenRefundModel(id={self.id}, psp_reference='{self.psp_reference}', "
            f"amount={self.amount}, status='{self.status}')>"
        )


class AdyenNotificationModel(Base):
    """Adyen 异步通知，merchant_reference 为订单号"""
    __tablename__ = "adyen_notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    psp_reference = Column(String(64), nullable=False, comment="Adyen 引用")
    original_reference = Column(String(64), nullable=True, comment="原始支付引用")
    merchant_reference = Column(String(64), nullable=False, comment="商户订单号")
    event_code = Column(String(64), nullable=False, comment="事件代码: AUTHORISATION/REFUND/...")
    success = Column(Boolean, nullable=False, default=False)
    amount_value = Column(Integer, nullable=True, comment="金额（最小货币单位）")
    amount_currency = Column(String(3), nullable=True)
    payment_method = Column(String(64), nullable=True)
    reason = Column(Text, nullable=True)
    done = Column(Boolean, nullable=False, default=False, comment="是否已处理")
    processing = Column(Boolean, nullable=False, default=False)
    error_count = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="创建时间"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=lambda: datetime.now(timezone.utc),
        comment="更新时间"
    )

    __table_args__ = (
        Index("ix_adyen_notifications_merchant_reference", "merchant_reference"),
        Index("ix_adyen_notifications_psp_reference", "psp_reference"),
    )

    def __repr__(self):
        return (
            f"<AdyenNotificationModel(id={self.id}, event_code='{self.event_code}', "
            f"merchant_reference='{self.merchant_reference}', done={self.done})>"
        )
