"""
订单数据库模型 - SQLAlchemy ORM模型
注意：订单表由电商平台维护，这里只映射退款与通知查询用到的列
"""
from sqlalchemy import (
    Column, String, Numeric, DateTime, ForeignKey, Index
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .base import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, comment="订单ID（UUID）")
    order_number = Column(String(64), unique=True, index=True, nullable=False, comment="订单号")
    currency_iso = Column(String(3), nullable=False, comment="货币代码 ISO-4217")
    locale = Column(String(16), nullable=True, comment="订单语言，如 en_GB")
    amount_total = Column(Numeric(precision=15, scale=2), nullable=False, comment="订单总额")

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

    transactions = relationship(
        "OrderTransactionModel",
        back_populates="order",
        lazy="raise",
        order_by="OrderTransactionModel.created_at",
    )

    def __repr__(self):
        return f"<OrderModel(id='{self.id}', order_number='{self.order_number}', currency='{self.currency_iso}')>"


class OrderTransactionModel(Base):
    __tablename__ = "order_transactions"

    id = Column(String(36), primary_key=True, comment="交易ID（UUID）")
    order_id = Column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联订单ID"
    )
    amount_total = Column(Numeric(precision=15, scale=2), nullable=False, comment="交易金额")
    psp_reference = Column(String(64), nullable=True, comment="Adyen 支付引用（已捕获支付）")
    payment_method = Column(String(64), nullable=True, comment="支付方式")
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="创建时间"
    )

    order = relationship("OrderModel", back_populates="transactions", lazy="raise")
    refunds = relationship("AdyenRefundModel", back_populates="order_transaction", lazy="raise")

    __table_args__ = (
        Index("ix_order_transactions_order_id", "order_id"),
    )

    def __repr__(self):
        return f"<OrderTransactionModel(id='{self.id}', order_id='{self.order_id}', psp_reference='{self.psp_reference}')>"
