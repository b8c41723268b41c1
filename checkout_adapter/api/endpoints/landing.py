import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from checkout_adapter.api.dependencies import get_landing_config
from checkout_adapter.api.landing_page import LandingKind, render_landing_page
from checkout_adapter.utils.config_loader import LandingConfig

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/payment-success", response_class=HTMLResponse, tags=["Landing"])
async def payment_success(
    session_id: Optional[str] = Query(default=None),
    config: LandingConfig = Depends(get_landing_config),
):
    logger.info("Payment success page accessed: session_id=%s", session_id)
    return HTMLResponse(render_landing_page(LandingKind.SUCCESS, config, session_id))


@router.get("/payment-cancel", response_class=HTMLResponse, tags=["Landing"])
async def payment_cancel(
    session_id: Optional[str] = Query(default=None),
    config: LandingConfig = Depends(get_landing_config),
):
    logger.info("Payment cancel page accessed: session_id=%s", session_id)
    return HTMLResponse(render_landing_page(LandingKind.CANCEL, config, session_id))
