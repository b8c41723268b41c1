"""
Landing page configuration loader.
"""

import logging
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "landing_pages.yml"

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*$")


class LandingPageContent(BaseModel):
    """Copy and colours for one landing page kind"""

    title: str
    heading: str
    message: str
    status_text: str
    icon: str
    gradient_start: str
    gradient_end: str
    accent: str


class LandingConfig(BaseModel):
    """Complete landing page configuration"""

    app_url_scheme: str = "checkoutapp"
    redirect_delay_seconds: int = Field(default=2, ge=0, le=30)
    success: LandingPageContent = Field(
        default_factory=lambda: LandingPageContent(
            title="Payment Successful",
            heading="Payment Successful!",
            message="Your premium subscription has been activated.",
            status_text="Returning to app",
            icon="✔",
            gradient_start="#667eea",
            gradient_end="#764ba2",
            accent="#4CAF50",
        )
    )
    cancel: LandingPageContent = Field(
        default_factory=lambda: LandingPageContent(
            title="Payment Cancelled",
            heading="Payment Cancelled",
            message="No charges were made to your account.",
            status_text="Returning to app",
            icon="⚠",
            gradient_start="#f093fb",
            gradient_end="#f5576c",
            accent="#ff9800",
        )
    )

    @field_validator("app_url_scheme")
    @classmethod
    def _valid_scheme(cls, value: str) -> str:
        scheme = value.strip().lower().rstrip(":/")
        if not _SCHEME_RE.match(scheme):
            raise ValueError(f"Invalid URL scheme: {value!r}")
        return scheme


def load_landing_config(config_path: Optional[Path] = None, app_url_scheme: Optional[str] = None) -> LandingConfig:
    """
    Load and validate landing page configuration from a YAML file

    Args:
        config_path: Path to config file. Defaults to config/landing_pages.yml;
            built-in defaults are used when the default file is absent.
        app_url_scheme: Overrides the scheme from the file when given.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    data = {}
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    elif config_path is not None:
        raise FileNotFoundError(f"Landing config file not found: {path}")
    else:
        logger.info("No landing config at %s; using built-in defaults", path)

    if app_url_scheme:
        data["app_url_scheme"] = app_url_scheme

    try:
        config = LandingConfig(**data)
    except ValidationError as e:
        logger.error("Landing config validation failed: %s", e)
        raise

    logger.info("Loaded landing config (scheme=%s, delay=%ss)", config.app_url_scheme, config.redirect_delay_seconds)
    return config
