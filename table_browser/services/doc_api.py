from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from table_browser.config.model import DEFAULT_API_BASE_URL
from table_browser.core.exceptions import DocApiError
from table_browser.core.models import Record, Table

logger = logging.getLogger(__name__)

ROW_VALUE_FORMAT = "simpleWithArrays"

# Safety stop for pagination loops on a misbehaving API
_MAX_PAGES = 1000


def _raise_for_status(response: httpx.Response) -> None:
    status_code = response.status_code
    if status_code < 400:
        return

    if status_code in {401, 403}:
        raise DocApiError("unauthorized", status_code=status_code)
    if status_code == 404:
        raise DocApiError("not_found", status_code=status_code)
    if status_code == 429:
        raise DocApiError("rate_limited", status_code=status_code)
    raise DocApiError("request_failed", status_code=status_code)


class DocApiClient:
    """
    Thin client for the document API (Coda REST v1 shape).

    Only the read endpoints the browser needs are exposed. Every list call
    follows `nextPageToken` until the requested number of items is reached.
    An `httpx.Client` can be injected (tests use `httpx.MockTransport`);
    otherwise the client owns one and closes it in `close()`.
    """

    def __init__(
            self,
            api_token: str,
            *,
            base_url: str = DEFAULT_API_BASE_URL,
            timeout: float = 30.0,
            client: Optional[httpx.Client] = None,
    ):
        if not api_token.isascii():
            # HTTP headers are ASCII; httpx would fail later with UnicodeEncodeError
            raise DocApiError("invalid_credentials", detail="API token contains non-ASCII characters")

        self.base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Accept": "application/json",
        }
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    def __enter__(self) -> DocApiClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _url(self, *segments: str) -> str:
        return self.base_url + "/" + "/".join(quote(s, safe="") for s in segments)

    def _get_page(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.get(url, params=params, headers=self._headers)
        except httpx.HTTPError as exc:
            raise DocApiError("network_error", detail=str(exc)) from exc

        _raise_for_status(response)

        try:
            body = response.json()
        except ValueError as exc:
            raise DocApiError("invalid_response", status_code=response.status_code) from exc

        if not isinstance(body, dict) or not isinstance(body.get("items", []), list):
            raise DocApiError("invalid_response", status_code=response.status_code)
        return body

    def _list_items(
            self,
            url: str,
            params: Optional[Dict[str, Any]] = None,
            limit: Optional[int] = None,
    ) -> List[Record]:
        base_params = {k: v for k, v in (params or {}).items() if v is not None}
        params = dict(base_params)
        if limit is not None:
            params["limit"] = limit

        items: List[Record] = []
        for _ in range(_MAX_PAGES):
            body = self._get_page(url, params)
            items.extend(body.get("items") or [])

            if limit is not None and len(items) >= limit:
                return items[:limit]

            page_token = body.get("nextPageToken")
            if not page_token:
                return items
            params = {**base_params, "pageToken": page_token}
            if limit is not None:
                params["limit"] = limit - len(items)

        logger.warning("Pagination stopped after %d pages", _MAX_PAGES, extra={"url": url})
        return items

    def list_tables(self, doc_id: str) -> List[Table]:
        items = self._list_items(self._url("docs", doc_id, "tables"))
        tables: List[Table] = []
        for item in items:
            if not isinstance(item, dict) or "id" not in item:
                raise DocApiError("invalid_response", detail="table item without id")
            tables.append(Table.from_api(item))
        return tables

    def list_columns(self, doc_id: str, table_id: str) -> List[Record]:
        return self._list_items(self._url("docs", doc_id, "tables", table_id, "columns"))

    def list_rows(
            self,
            doc_id: str,
            table_id: str,
            *,
            limit: Optional[int] = None,
            value_format: str = ROW_VALUE_FORMAT,
    ) -> List[Record]:
        """
        :param limit: maximum number of rows; None fetches every page.
        """
        if limit is not None and limit <= 0:
            return []
        return self._list_items(
            self._url("docs", doc_id, "tables", table_id, "rows"),
            params={"valueFormat": value_format},
            limit=limit,
        )
