"""
Site settings component - branding row with defaults and optional caching.
"""

from ._impl import SiteSettingsService, get_default_settings
from .ports import SettingsCachePort, SettingsStorePort

__all__ = [
    "SiteSettingsService",
    "get_default_settings",
    "SettingsCachePort",
    "SettingsStorePort",
]
