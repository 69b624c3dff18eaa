"""Infrastructure models package exports."""
from .base import Base, metadata
from .order import OrderModel, OrderTransactionModel
from .adyen import AdyenRefundModel, AdyenNotificationModel

__all__ = [
    "Base",
    "metadata",
    "OrderModel",
    "OrderTransactionModel",
    "AdyenRefundModel",
    "AdyenNotificationModel",
]
