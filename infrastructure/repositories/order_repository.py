"""
订单仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Optional, Sequence
from decimal import Decimal
from sqlalchemy import select, inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.order.entity import Order, OrderTransaction
from domain.order.repository import OrderRepository
from infrastructure.models.order import OrderModel, OrderTransactionModel


# 可预加载的关联
ASSOCIATIONS = {
    "transactions": OrderModel.transactions,
}


def transaction_to_entity(model: OrderTransactionModel) -> OrderTransaction:
    return OrderTransaction(
        id=model.id,
        order_id=model.order_id,
        amount_total=Decimal(str(model.amount_total)),
        psp_reference=model.psp_reference,
        payment_method=model.payment_method,
        created_at=model.created_at,
    )


def order_to_entity(model: OrderModel) -> Order:
    """将数据库模型转换为领域实体；未加载的关联保持为空"""
    transactions = []
    if "transactions" not in inspect(model).unloaded:
        transactions = [transaction_to_entity(tx) for tx in model.transactions]
    return Order(
        id=model.id,
        order_number=model.order_number,
        currency_iso=model.currency_iso,
        amount_total=Decimal(str(model.amount_total)),
        locale=model.locale,
        created_at=model.created_at,
        updated_at=model.updated_at,
        transactions=transactions,
    )


class SQLAlchemyOrderRepository(OrderRepository):
    """订单仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_order(self, order_id: str, associations: Sequence[str] = ()) -> Optional[Order]:
        query = select(OrderModel).where(OrderModel.id == order_id)
        for name in associations:
            if name not in ASSOCIATIONS:
                raise ValueError(f"Unknown order association: {name}")
            query = query.options(selectinload(ASSOCIATIONS[name]))
        result = await self.session.execute(query)
        db_order = result.scalar_one_or_none()
        return order_to_entity(db_order) if db_order else None
