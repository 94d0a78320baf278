"""Persistence for canonical records and import history."""

from dealer_pulse.store.base import TABLE_KEYS, RecordStore, check_table
from dealer_pulse.store.sqlite_store import ImportRun, SQLiteRecordStore
from dealer_pulse.store.supabase_store import SupabaseRecordStore

__all__ = [
    "ImportRun",
    "RecordStore",
    "SQLiteRecordStore",
    "SupabaseRecordStore",
    "TABLE_KEYS",
    "check_table",
]
