"""
Top-level package for the document table browser.

This package exposes the core architecture (domain, services, UI adapters).
Most code should import from submodules such as:
    table_browser.core
    table_browser.services
    table_browser.ui
"""

__all__: list[str] = []
