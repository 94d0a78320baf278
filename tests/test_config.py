"""Tests for Settings loading and store construction."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dealer_pulse.config import Settings, open_store
from dealer_pulse.store import SQLiteRecordStore, SupabaseRecordStore


class TestSettings:
    """Tests for Settings sources."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.backend == "sqlite"
        assert settings.header_scan_limit == 10
        assert settings.day_first is False
        assert settings.aged_inventory_days == 90

    def test_from_yaml_nested(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            "storage:\n"
            "  backend: supabase\n"
            "  supabase_url: https://proj.supabase.co\n"
            "  supabase_key: k\n"
            "ingest:\n"
            "  day_first: true\n"
            "  header_scan_limit: 15\n"
            "analytics:\n"
            "  aged_inventory_days: 60\n"
        )
        settings = Settings.from_yaml(path)
        assert settings.backend == "supabase"
        assert settings.supabase_url == "https://proj.supabase.co"
        assert settings.day_first is True
        assert settings.header_scan_limit == 15
        assert settings.aged_inventory_days == 60

    def test_from_yaml_flat(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("db_path: /tmp/x.db\nday_first: true\n")
        settings = Settings.from_yaml(path)
        assert settings.db_path == Path("/tmp/x.db")
        assert settings.day_first is True

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert Settings.from_yaml(path) == Settings()

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("ingest:\n  header_scan_limit: 15\n")
        monkeypatch.setenv("DEALER_PULSE_DAY_FIRST", "true")
        monkeypatch.setenv("DEALER_PULSE_HEADER_SCAN_LIMIT", "5")
        settings = Settings.load(path)
        assert settings.day_first is True
        assert settings.header_scan_limit == 5

    def test_invalid_backend(self) -> None:
        with pytest.raises(ValidationError):
            Settings(backend="postgres")


class TestOpenStore:
    def test_sqlite(self, temp_db: Path) -> None:
        assert isinstance(open_store(Settings(db_path=temp_db)), SQLiteRecordStore)

    def test_supabase(self) -> None:
        settings = Settings(backend="supabase", supabase_url="https://proj.supabase.co", supabase_key="k")
        assert isinstance(open_store(settings), SupabaseRecordStore)

    def test_supabase_without_credentials(self) -> None:
        with pytest.raises(ValueError):
            open_store(Settings(backend="supabase"))
