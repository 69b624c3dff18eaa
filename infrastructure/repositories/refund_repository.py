"""
Adyen 退款仓储实现
"""
from typing import Iterable, List, Optional
from sqlalchemy import select, inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.refund.entity import Refund, RefundSource, RefundStatus
from domain.refund.repository import RefundRepository
from infrastructure.models.adyen import AdyenRefundModel
from infrastructure.models.order import OrderTransactionModel
from infrastructure.repositories.order_repository import order_to_entity
from core.logging_config import get_logger


logger = get_logger(__name__)


class SQLAlchemyRefundRepository(RefundRepository):
    """退款仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: AdyenRefundModel) -> Refund:
        """将数据库模型转换为领域实体（订单交易与订单已预加载时附带订单）"""
        order = None
        if "order_transaction" not in inspect(model).unloaded:
            tx = model.order_transaction
            if tx is not None and "order" not in inspect(tx).unloaded:
                order = order_to_entity(tx.order)
        return Refund(
            id=model.id,
            order_transaction_id=model.order_transaction_id,
            psp_reference=model.psp_reference,
            source=RefundSource(model.source),
            status=RefundStatus(model.status),
            amount=model.amount,
            created_at=model.created_at,
            updated_at=model.updated_at,
            order=order,
        )

    async def create(self, refund: Refund) -> Refund:
        """创建退款记录"""
        db_refund = AdyenRefundModel(
            order_transaction_id=refund.order_transaction_id,
            psp_reference=refund.psp_reference,
            source=refund.source.value,
            status=refund.status.value,
            amount=refund.amount,
            updated_at=refund.updated_at,
        )
        if refund.created_at is not None:
            db_refund.created_at = refund.created_at
        self.session.add(db_refund)
        await self.session.flush()
        await self.session.refresh(db_refund)

        logger.info(
            "adyen_refund_created",
            refund_id=db_refund.id,
            order_transaction_id=db_refund.order_transaction_id,
            psp_reference=db_refund.psp_reference,
            amount=db_refund.amount,
        )
        created = self._to_entity(db_refund)
        created.order = refund.order
        return created

    async def list_by_order_id(
        self,
        order_id: str,
        exclude_statuses: Optional[Iterable[RefundStatus]] = None,
    ) -> List[Refund]:
        query = (
            select(AdyenRefundModel)
            .join(OrderTransactionModel, AdyenRefundModel.order_transaction_id == OrderTransactionModel.id)
            .where(OrderTransactionModel.order_id == order_id)
            .options(
                selectinload(AdyenRefundModel.order_transaction).selectinload(OrderTransactionModel.order)
            )
            .order_by(AdyenRefundModel.created_at.desc(), AdyenRefundModel.id.desc())
        )
        excluded = [s.value for s in (exclude_statuses or [])]
        if excluded:
            query = query.where(AdyenRefundModel.status.not_in(excluded))

        result = await self.session.execute(query)
        return [self._to_entity(r) for r in result.scalars().all()]
