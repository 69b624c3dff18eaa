"""
Adyen admin API routes.

Response bodies follow the admin UI contract: ``{"success": ...}`` for
actions and bare arrays for listings. Keep this thin: no SDK details here.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Form
from fastapi.responses import JSONResponse

from api.dependencies import get_admin_service
from application.services.admin_service import AdyenAdminService


router = APIRouter(prefix="/api", tags=["Adyen Admin"])


@router.post("/_action/adyen/verify", summary="Verify Adyen API credentials")
async def check(
    payload: Any = Body(default=None),
    service: AdyenAdminService = Depends(get_admin_service),
):
    result = await service.check_credentials(payload)
    return JSONResponse(result.to_body())


@router.post("/adyen/refunds", name="api.adyen_refund.post", summary="Submit refund")
async def post_refund(
    order_id: Optional[str] = Form(default=None, alias="orderId"),
    refund_amount: Optional[str] = Form(default=None, alias="refundAmount"),
    service: AdyenAdminService = Depends(get_admin_service),
):
    """
    Send a refund for ``refundAmount`` (major units) of order ``orderId`` to Adyen.

    Missing or unknown input answers 400 with a plain-text message.
    """
    result = await service.post_refund(order_id, refund_amount)
    return JSONResponse(result.to_body())


@router.get("/adyen/orders/{order_id}/refunds", name="api.adyen_refund.get", summary="List refunds")
async def get_refunds(order_id: str, service: AdyenAdminService = Depends(get_admin_service)):
    refunds = await service.get_refunds(order_id)
    return JSONResponse([r.to_body() for r in refunds])


@router.get("/adyen/orders/{order_id}/notifications", summary="List order notifications")
async def get_order_notifications(order_id: str, service: AdyenAdminService = Depends(get_admin_service)):
    """Get all the Adyen notifications for an order."""
    notifications = await service.get_order_notifications(order_id)
    return JSONResponse([n.to_body() for n in notifications])
