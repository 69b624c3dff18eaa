"""领域层业务异常定义，供领域与基础设施使用。

核心（core）层仅负责全局映射与异常处理，尽量避免领域层反向依赖核心层。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
        message_key: Optional[str] = None,
        format_params: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        self.message_key = message_key
        self.format_params = format_params
        super().__init__(self.message)


class InvalidAdminRequestException(BusinessException):
    """管理后台请求参数缺失或无效，响应为 400 纯文本。"""

    def __init__(self, message: str, *, field: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(
            code=BusinessCode.PARAM_MISSING,
            message=message,
            error_type="InvalidAdminRequest",
            details=details,
            field=field,
        )


class OrderNotFoundException(BusinessException):
    def __init__(self, order_id: Optional[str] = None):
        details = {"order_id": order_id} if order_id else None
        super().__init__(
            code=BusinessCode.ORDER_NOT_FOUND,
            message=f"Unable to find order {order_id}",
            error_type="OrderNotFound",
            details=details,
            message_key="order.not_found",
            format_params={"order_id": order_id},
        )


class RefundNotPossibleException(BusinessException):
    def __init__(self, order_number: str, reason: str):
        super().__init__(
            code=BusinessCode.REFUND_NOT_POSSIBLE,
            message=f"Refund not possible for order {order_number}: {reason}",
            error_type="RefundNotPossible",
            details={"order_number": order_number, "reason": reason},
            message_key="refund.not_possible",
        )


class DomainValidationException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
        message_key: str | None = None,
        format_params: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="DomainValidationError",
            details=details,
            field=field,
            message_key=message_key or "validation.domain",
            format_params=format_params,
        )
