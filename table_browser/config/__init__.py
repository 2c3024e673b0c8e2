"""
Config package for table_browser.

Responsible for:
- the settings model (AppSettings)
- config I/O helpers (load_app_settings)
"""

from .model import AppSettings
from .io import load_app_settings, settings_from_dict

__all__ = ["AppSettings", "load_app_settings", "settings_from_dict"]
