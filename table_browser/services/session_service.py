from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from table_browser.core.exceptions import DocApiError
from table_browser.core.models import Table
from table_browser.core.selection_state import SelectionState
from table_browser.services.doc_api import DocApiClient
from table_browser.services.fetch_service import TableDataFetcher

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], DocApiClient]


@dataclass(frozen=True)
class Credentials:
    """
    API token and document id entered by the user.

    Held in memory only; the token is masked in repr so it never reaches logs.
    """
    api_token: str
    doc_id: str

    @property
    def is_complete(self) -> bool:
        return bool(self.api_token) and bool(self.doc_id)

    def __repr__(self) -> str:
        return f"Credentials(api_token='***', doc_id={self.doc_id!r})"

    def to_dict(self) -> Dict[str, str]:
        return {"api_token": self.api_token, "doc_id": self.doc_id}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Credentials:
        data = data or {}
        return cls(
            api_token=str(data.get("api_token") or "").strip(),
            doc_id=str(data.get("doc_id") or "").strip(),
        )


@dataclass
class SessionContext:
    """
    Everything one browser session knows: credentials, the loaded tables and
    the current selection. Created empty, mutated only by user actions, and
    never persisted.
    """
    credentials: Credentials
    tables: List[Table] = field(default_factory=list)
    selection: SelectionState = field(default_factory=SelectionState)

    @property
    def table_ids(self) -> List[str]:
        return [t.id for t in self.tables]

    def table(self, table_id: str) -> Optional[Table]:
        return next((t for t in self.tables if t.id == table_id), None)

    def load_tables(self, client_factory: ClientFactory) -> List[Table]:
        """
        Replace the table list from the API and start with an empty selection.

        :raises DocApiError: the table list is left untouched on failure.
        """
        with client_factory(self.credentials.api_token) as client:
            tables = client.list_tables(self.credentials.doc_id)

        logger.info(
            "Loaded tables",
            extra={"doc_id": self.credentials.doc_id, "n_tables": len(tables)},
        )
        self.tables = tables
        self.selection = SelectionState()
        return tables

    def fetcher(self, client: DocApiClient) -> TableDataFetcher:
        return TableDataFetcher(client, self.credentials.doc_id)


def describe_api_error(exc: DocApiError) -> str:
    """User-facing message for a failed table list request."""
    return f"Failed to fetch tables. Please check your API token and document ID. ({exc.code})"
