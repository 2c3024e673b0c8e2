from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from table_browser.config.model import AppSettings
from table_browser.core.exceptions import ConfigError, InvalidRowModeError
from table_browser.core.models import RowMode

logger = logging.getLogger(__name__)

ENV_API_BASE_URL = "TABLE_BROWSER_API_BASE_URL"
ENV_REQUEST_TIMEOUT = "TABLE_BROWSER_REQUEST_TIMEOUT"


def _str_list(raw: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = raw.get(key)
    if value is None:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    # Keep order, drop duplicates
    return list(dict.fromkeys(value))


def _timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"request_timeout must be a number, got {value!r}") from e
    if timeout <= 0:
        raise ConfigError("request_timeout must be positive")
    return timeout


def settings_from_dict(raw: Dict[str, Any]) -> AppSettings:
    if not isinstance(raw, dict):
        raise ConfigError("global.json must contain a JSON object")

    defaults = AppSettings()

    try:
        default_row_mode = RowMode.parse(raw.get("default_row_mode", defaults.default_row_mode))
    except InvalidRowModeError as e:
        raise ConfigError(str(e)) from e

    settings = AppSettings(
        ui_title=str(raw.get("ui_title", defaults.ui_title)),
        subtitle=str(raw.get("subtitle", defaults.subtitle)),
        api_base_url=str(raw.get("api_base_url", defaults.api_base_url)).rstrip("/"),
        request_timeout=_timeout(raw.get("request_timeout", defaults.request_timeout)),
        default_row_mode=default_row_mode,
        column_attributes=_str_list(raw, "column_attributes", defaults.column_attributes),
        row_attributes=_str_list(raw, "row_attributes", defaults.row_attributes),
        available_column_attributes=_str_list(
            raw, "available_column_attributes", defaults.available_column_attributes
        ),
        available_row_attributes=_str_list(
            raw, "available_row_attributes", defaults.available_row_attributes
        ),
    )

    # Pre-checked attributes must be offered by the pickers
    for chosen, available in (
        (settings.column_attributes, settings.available_column_attributes),
        (settings.row_attributes, settings.available_row_attributes),
    ):
        for name in chosen:
            if name not in available:
                available.append(name)

    return settings


def _apply_env_overrides(settings: AppSettings) -> AppSettings:
    base_url = os.getenv(ENV_API_BASE_URL)
    if base_url:
        settings.api_base_url = base_url.rstrip("/")

    timeout = os.getenv(ENV_REQUEST_TIMEOUT)
    if timeout:
        settings.request_timeout = _timeout(timeout)

    return settings


def load_app_settings(root: Path | str, *, use_env: bool = True) -> AppSettings:
    """
    Load settings from a config directory.

    Expected structure:

        root/
            global.json

    A missing global.json yields the defaults. Environment variables
    TABLE_BROWSER_API_BASE_URL and TABLE_BROWSER_REQUEST_TIMEOUT override
    the file when use_env is True.

    :param root: Directory containing 'global.json'.
    :return: An AppSettings instance.
    :raises ConfigError: if global.json is not valid JSON or has wrong types.
    """
    root = Path(root)
    global_path = root / "global.json"

    logger.info("Loading global config", extra={"config_root": str(root)})

    raw: Optional[Dict[str, Any]]
    if not global_path.is_file():
        logger.info("No global.json found, using defaults", extra={"path": str(global_path)})
        raw = {}
    else:
        try:
            with global_path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    settings = settings_from_dict(raw)
    if use_env:
        settings = _apply_env_overrides(settings)
    return settings
