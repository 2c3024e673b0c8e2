from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from table_browser.config.model import AppSettings
from table_browser.services.doc_api import DocApiClient


@dataclass
class AppConfig:
    config_root: Path
    settings: AppSettings
    client_factory: Optional[Callable[[str], DocApiClient]] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.client_factory is None:
            raise RuntimeError("AppConfig.client_factory must be initialized.")
        if not self.settings.api_base_url:
            raise RuntimeError("AppConfig.settings.api_base_url must be set.")
