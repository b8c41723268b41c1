"""
Utility modules for the checkout adapter
"""
from .config_loader import LandingConfig, LandingPageContent, load_landing_config
from .settings import ConfigurationError, Settings

__all__ = [
    'LandingConfig',
    'LandingPageContent',
    'load_landing_config',
    'ConfigurationError',
    'Settings',
]
