"""CSV ingestion: tokenize, locate header, classify, map, build upsert payloads."""

from dealer_pulse.ingest.classifier import CLASSIFIER_RULES, ClassifierRule, classify_header
from dealer_pulse.ingest.dates import month_bucket, normalize_date
from dealer_pulse.ingest.header import is_header_row, locate_header
from dealer_pulse.ingest.mappers import BaseMapper
from dealer_pulse.ingest.payload import UpsertPayload, build_upsert_payload
from dealer_pulse.ingest.registry import MapperRegistry
from dealer_pulse.ingest.resolver import FieldResolver, normalize_key
from dealer_pulse.ingest.tokenizer import build_raw_row, split_fields, split_rows

__all__ = [
    "BaseMapper",
    "CLASSIFIER_RULES",
    "ClassifierRule",
    "FieldResolver",
    "MapperRegistry",
    "UpsertPayload",
    "build_raw_row",
    "build_upsert_payload",
    "classify_header",
    "is_header_row",
    "locate_header",
    "month_bucket",
    "normalize_date",
    "normalize_key",
    "split_fields",
    "split_rows",
]
