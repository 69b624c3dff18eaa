"""
API依赖项 - 组装应用服务（组合根）
"""
from application.services.admin_service import AdyenAdminService
from application.utils.currency import CurrencyFormatter, CurrencyUtil
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork
from infrastructure.external.payments import get_adyen_client


async def get_admin_service() -> AdyenAdminService:
    currency_util = CurrencyUtil()
    return AdyenAdminService(
        uow_factory=SQLAlchemyUnitOfWork,
        gateway_factory=get_adyen_client,
        currency_formatter=CurrencyFormatter(currency_util),
        currency_util=currency_util,
    )
