"""Tests for SupabaseRecordStore against a mocked PostgREST endpoint."""

import json

import httpx
import pytest

from dealer_pulse.store import SupabaseRecordStore


def _store(handler) -> SupabaseRecordStore:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return SupabaseRecordStore("https://proj.supabase.co/", "secret-key", client=client)


class TestSupabaseRecordStore:
    """Tests for upsert and fetch."""

    def test_upsert_request_shape(self) -> None:
        """Upsert posts all rows with on_conflict and merge-duplicates."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201)

        written = _store(handler).upsert("inventory", [{"vin": "A"}, {"vin": "B"}], "vin")
        assert written == 2
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/rest/v1/inventory"
        assert request.url.params["on_conflict"] == "vin"
        assert "resolution=merge-duplicates" in request.headers["Prefer"]
        assert request.headers["apikey"] == "secret-key"
        assert request.headers["Authorization"] == "Bearer secret-key"
        assert json.loads(request.content) == [{"vin": "A"}, {"vin": "B"}]

    def test_upsert_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Invalid API key"})

        with pytest.raises(httpx.HTTPStatusError):
            _store(handler).upsert("inventory", [{"vin": "A"}], "vin")

    def test_upsert_rejects_unknown_table_before_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(ValueError):
            _store(handler).upsert("users", [{"id": 1}], "id")

    def test_fetch_with_month_filter(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/rest/v1/leads_marketing"
            assert request.url.params["month"] == "eq.2024-03"
            return httpx.Response(200, json=[{"lead_id": "L1", "month": "2024-03"}])

        rows = _store(handler).fetch("leads_marketing", month="2024-03")
        assert rows == [{"lead_id": "L1", "month": "2024-03"}]

    def test_fetch_pages_until_short_page(self) -> None:
        """Rows beyond one page are read with successive Range headers."""
        rows = [{"vin": f"V{i}"} for i in range(5)]
        ranges: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            ranges.append(request.headers["Range"])
            assert request.headers["Range-Unit"] == "items"
            assert request.url.params["order"] == "vin.asc"
            start, end = (int(n) for n in request.headers["Range"].split("-"))
            return httpx.Response(206, json=rows[start : end + 1])

        client = httpx.Client(transport=httpx.MockTransport(handler))
        store = SupabaseRecordStore("https://proj.supabase.co", "secret-key", client=client, page_size=2)
        assert store.fetch("inventory") == rows
        assert ranges == ["0-1", "2-3", "4-5"]

    def test_fetch_rejects_unknown_table_before_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(ValueError, match="Unknown table"):
            _store(handler).fetch("users")

    def test_requires_credentials(self) -> None:
        with pytest.raises(ValueError):
            SupabaseRecordStore("", "key")
        with pytest.raises(ValueError):
            SupabaseRecordStore("https://proj.supabase.co", "")
