"""
Landing pages shown after the hosted checkout redirects the browser back.

One template serves both outcomes. The page holds no state and verifies
nothing: it counts down and hands control back to the invoking app through
its custom URL scheme. Authoritative confirmation comes from verify-session.
"""

from enum import Enum
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

from jinja2 import Environment, FileSystemLoader, select_autoescape

from checkout_adapter.utils.config_loader import LandingConfig

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


class LandingKind(str, Enum):
    SUCCESS = "success"
    CANCEL = "cancel"


def app_redirect_url(kind: LandingKind, scheme: str, session_id: Optional[str] = None) -> str:
    """checkoutapp://payment-success?session_id=cs_123 or checkoutapp://payment-cancel"""
    url = f"{scheme}://payment-{kind.value}"
    if kind is LandingKind.SUCCESS and session_id:
        url = f"{url}?{urlencode({'session_id': session_id})}"
    return url


def render_landing_page(kind: LandingKind, config: LandingConfig, session_id: Optional[str] = None) -> str:
    page = config.success if kind is LandingKind.SUCCESS else config.cancel
    shown_session = session_id if kind is LandingKind.SUCCESS else None
    template = _env.get_template("landing.html")
    return template.render(
        kind=kind.value,
        page=page,
        session_id=shown_session,
        delay_seconds=config.redirect_delay_seconds,
        redirect_url=app_redirect_url(kind, config.app_url_scheme, shown_session),
    )
