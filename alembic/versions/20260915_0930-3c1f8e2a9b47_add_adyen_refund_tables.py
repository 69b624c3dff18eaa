"""add_adyen_refund_tables

Revision ID: 3c1f8e2a9b47
Revises:
Create Date: 2026-09-15 09:30:12.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1f8e2a9b47'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 订单表由电商平台维护；这里只建退款/通知查询用到的列
    op.create_table(
        'orders',
        sa.Column('id', sa.String(length=36), nullable=False, comment='订单ID（UUID）'),
        sa.Column('order_number', sa.String(length=64), nullable=False, comment='订单号'),
        sa.Column('currency_iso', sa.String(length=3), nullable=False, comment='货币代码 ISO-4217'),
        sa.Column('locale', sa.String(length=16), nullable=True, comment='订单语言，如 en_GB'),
        sa.Column('amount_total', sa.Numeric(precision=15, scale=2), nullable=False, comment='订单总额'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, comment='更新时间'),
        sa.PrimaryKeyConstraint('id', name='pk_orders'),
    )
    op.create_index('ix_orders_order_number', 'orders', ['order_number'], unique=True)

    op.create_table(
        'order_transactions',
        sa.Column('id', sa.String(length=36), nullable=False, comment='交易ID（UUID）'),
        sa.Column('order_id', sa.String(length=36), nullable=False, comment='关联订单ID'),
        sa.Column('amount_total', sa.Numeric(precision=15, scale=2), nullable=False, comment='交易金额'),
        sa.Column('psp_reference', sa.String(length=64), nullable=True, comment='Adyen 支付引用（已捕获支付）'),
        sa.Column('payment_method', sa.String(length=64), nullable=True, comment='支付方式'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='创建时间'),
        sa.ForeignKeyConstraint(
            ['order_id'], ['orders.id'],
            name='fk_order_transactions_order_id_orders', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_order_transactions'),
    )
    op.create_index('ix_order_transactions_order_id', 'order_transactions', ['order_id'], unique=False)

    op.create_table(
        'adyen_refunds',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('order_transaction_id', sa.String(length=36), nullable=False, comment='关联订单交易ID'),
        sa.Column('psp_reference', sa.String(length=64), nullable=False, comment='Adyen 退款引用'),
        sa.Column('source', sa.String(length=16), nullable=False, comment='来源: platform/adyen'),
        sa.Column('status', sa.String(length=32), nullable=False, comment='状态: Pending Webhook/Success/Failed'),
        sa.Column('amount', sa.Integer(), nullable=False, comment='退款金额（最小货币单位）'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, comment='更新时间'),
        sa.ForeignKeyConstraint(
            ['order_transaction_id'], ['order_transactions.id'],
            name='fk_adyen_refunds_order_transaction_id_order_transactions', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_adyen_refunds'),
    )
    op.create_index('ix_adyen_refunds_order_transaction_id', 'adyen_refunds', ['order_transaction_id'], unique=False)
    op.create_index('ix_adyen_refunds_psp_reference', 'adyen_refunds', ['psp_reference'], unique=False)

    op.create_table(
        'adyen_notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('psp_reference', sa.String(length=64), nullable=False, comment='Adyen 引用'),
        sa.Column('original_reference', sa.String(length=64), nullable=True, comment='原始支付引用'),
        sa.Column('merchant_reference', sa.String(length=64), nullable=False, comment='商户订单号'),
        sa.Column('event_code', sa.String(length=64), nullable=False, comment='事件代码: AUTHORISATION/REFUND/...'),
        sa.Column('success', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('amount_value', sa.Integer(), nullable=True, comment='金额（最小货币单位）'),
        sa.Column('amount_currency', sa.String(length=3), nullable=True),
        sa.Column('payment_method', sa.String(length=64), nullable=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('done', sa.Boolean(), nullable=False, server_default=sa.false(), comment='是否已处理'),
        sa.Column('processing', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('error_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, comment='更新时间'),
        sa.PrimaryKeyConstraint('id', name='pk_adyen_notifications'),
    )
    op.create_index('ix_adyen_notifications_merchant_reference', 'adyen_notifications', ['merchant_reference'], unique=False)
    op.create_index('ix_adyen_notifications_psp_reference', 'adyen_notifications', ['psp_reference'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_adyen_notifications_psp_reference', table_name='adyen_notifications')
    op.drop_index('ix_adyen_notifications_merchant_reference', table_name='adyen_notifications')
    op.drop_table('adyen_notifications')

    op.drop_index('ix_adyen_refunds_psp_reference', table_name='adyen_refunds')
    op.drop_index('ix_adyen_refunds_order_transaction_id', table_name='adyen_refunds')
    op.drop_table('adyen_refunds')

    op.drop_index('ix_order_transactions_order_id', table_name='order_transactions')
    op.drop_table('order_transactions')

    op.drop_index('ix_orders_order_number', table_name='orders')
    op.drop_table('orders')
