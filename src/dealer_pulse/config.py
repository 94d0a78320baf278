"""Runtime settings: storage backend, ingest options, analytics thresholds."""

import os
from pathlib import Path
from typing import Literal, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field

from dealer_pulse.ingest.header import DEFAULT_SCAN_LIMIT

ENV_PREFIX = "DEALER_PULSE_"


class Settings(BaseModel):
    """Settings for the import pipeline and the store it writes to."""

    backend: Literal["sqlite", "supabase"] = "sqlite"
    db_path: Path = Path("dealer_pulse.db")
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None

    header_scan_limit: int = Field(default=DEFAULT_SCAN_LIMIT, ge=1)
    day_first: bool = Field(
        default=False,
        description="Read ambiguous dates like 03/04/2024 as day/month",
    )

    aged_inventory_days: int = Field(default=90, ge=0)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load from YAML. Supports nested (storage/ingest/analytics) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        storage = data.get("storage", {})
        ingest = data.get("ingest", {})
        analytics = data.get("analytics", {})

        def _get(key: str, nested: dict, top: dict):
            return nested.get(key, top.get(key))

        flat = {
            "backend": _get("backend", storage, data),
            "db_path": _get("db_path", storage, data),
            "supabase_url": _get("supabase_url", storage, data),
            "supabase_key": _get("supabase_key", storage, data),
            "header_scan_limit": _get("header_scan_limit", ingest, data),
            "day_first": _get("day_first", ingest, data),
            "aged_inventory_days": _get("aged_inventory_days", analytics, data),
        }
        return cls.model_validate({k: v for k, v in flat.items() if v is not None})

    @classmethod
    def from_env(cls, base: Optional["Settings"] = None) -> "Settings":
        """Apply DEALER_PULSE_* environment overrides on top of base (or defaults)."""
        settings = base or cls()
        overrides: dict = {}
        for name in cls.model_fields:
            value = os.environ.get(ENV_PREFIX + name.upper())
            if value is not None and value != "":
                overrides[name] = value
        if not overrides:
            return settings
        return cls.model_validate({**settings.model_dump(), **overrides})

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "Settings":
        """YAML file (if given) with environment overrides applied."""
        base = cls.from_yaml(path) if path else None
        return cls.from_env(base)


def open_store(settings: Settings):
    """Build the configured record store."""
    if settings.backend == "supabase":
        from dealer_pulse.store import SupabaseRecordStore

        return SupabaseRecordStore(settings.supabase_url or "", settings.supabase_key or "")
    from dealer_pulse.store import SQLiteRecordStore

    return SQLiteRecordStore(settings.db_path)
