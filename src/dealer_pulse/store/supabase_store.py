"""Hosted backend store speaking the PostgREST (Supabase) REST protocol."""

import logging
from typing import Optional

import httpx

from .base import TABLE_KEYS, check_table

logger = logging.getLogger(__name__)


class SupabaseRecordStore:
    """
    Upserts via POST /rest/v1/{table}?on_conflict={key} with merge-duplicates
    resolution, so re-importing a report updates rows instead of duplicating them.
    """

    REST_PATH = "/rest/v1/"

    def __init__(
        self,
        url: str,
        api_key: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        page_size: int = 1000,
    ):
        """
        Args:
            url: Project URL, e.g. https://xyz.supabase.co
            api_key: anon or service-role key
            client: Optional httpx client (tests inject a MockTransport)
            page_size: Rows requested per page when fetching
        """
        if not url or not api_key:
            raise ValueError("Supabase store requires both url and api_key")
        self._base_url = url.rstrip("/") + self.REST_PATH
        self.page_size = page_size
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def upsert(self, table: str, records: list[dict], conflict_key: str) -> int:
        """Upsert all records in one request. Raises httpx.HTTPStatusError on rejection."""
        check_table(table, conflict_key)
        response = self._client.post(
            self._base_url + table,
            params={"on_conflict": conflict_key},
            json=records,
            headers={**self._headers, "Prefer": "resolution=merge-duplicates,return=minimal"},
        )
        if response.is_error:
            logger.warning("Upsert to %s failed (%d): %s", table, response.status_code, response.text)
        response.raise_for_status()
        return len(records)

    def fetch(self, table: str, month: Optional[str] = None) -> list[dict]:
        """
        Select all rows of a table, optionally filtered by month.

        PostgREST caps each response at its max-rows setting, so rows are read in
        pages of `page_size` via the Range header until a short page comes back.
        """
        key = TABLE_KEYS.get(table, "")
        check_table(table, key)
        params = {"select": "*", "order": f"{key}.asc"}
        if month:
            params["month"] = f"eq.{month}"
        rows: list[dict] = []
        offset = 0
        while True:
            headers = {
                **self._headers,
                "Range-Unit": "items",
                "Range": f"{offset}-{offset + self.page_size - 1}",
            }
            response = self._client.get(self._base_url + table, params=params, headers=headers)
            response.raise_for_status()
            page = response.json()
            rows.extend(page)
            if len(page) < self.page_size:
                break
            offset += self.page_size
        logger.debug("Fetched %d rows from %s", len(rows), table)
        return rows
