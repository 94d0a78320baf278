"""Locate the real column header below banner and metadata rows."""

import logging
from typing import Iterable, Optional, Sequence

from dealer_pulse.models.records import ReportType

from .classifier import CLASSIFIER_RULES, ClassifierRule, classify_header

logger = logging.getLogger(__name__)

DEFAULT_SCAN_LIMIT = 10

# Banner rows are usually a single cell ("EXPORT- Booking to Delivery Register")
MIN_HEADER_FIELDS = 2


def is_header_row(
    fields: Sequence[str],
    rules: Iterable[ClassifierRule] = CLASSIFIER_RULES,
) -> bool:
    """True when the row has several cells and matches a full classifier keyword combination."""
    if sum(1 for value in fields if value) < MIN_HEADER_FIELDS:
        return False
    return classify_header(fields, rules) is not ReportType.UNKNOWN


def locate_header(
    rows: Sequence[Sequence[str]],
    rules: Iterable[ClassifierRule] = CLASSIFIER_RULES,
    limit: int = DEFAULT_SCAN_LIMIT,
) -> Optional[int]:
    """
    Return the index of the first of the leading `limit` rows that looks like a
    report header, or None when no row qualifies.

    A lone keyword is not enough: "Opportunity Report" or "Western Province
    Dealers" (which contains "vin") stay banners because they match no rule.
    """
    rules = tuple(rules)
    for index, fields in enumerate(rows[:limit]):
        if is_header_row(fields, rules):
            logger.debug("Header row found at index %d", index)
            return index
    return None
