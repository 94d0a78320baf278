"""Report classification by header keywords.

Rules are evaluated in order and the first match wins. Each rule is a list of
alternatives; an alternative matches when every keyword in it is present in
the lowercased header line.
"""

from dataclasses import dataclass
from typing import Iterable

from dealer_pulse.models.records import ReportType

from .tokenizer import row_text

RULES_VERSION = "2"


@dataclass(frozen=True)
class ClassifierRule:
    """Keyword rule for one report type."""

    report_type: ReportType
    any_of: tuple[tuple[str, ...], ...]

    def matches(self, header_line: str) -> bool:
        """True when all keywords of at least one alternative occur in the line."""
        return any(all(kw in header_line for kw in group) for group in self.any_of)


CLASSIFIER_RULES: tuple[ClassifierRule, ...] = (
    ClassifierRule(
        ReportType.LEADS,
        (
            ("lead id", "qualification"),
            ("lead id", "score"),
            ("lead id", "source"),
        ),
    ),
    ClassifierRule(
        ReportType.OPPORTUNITIES,
        (
            ("opportunity", "customer"),
            ("test drive", "customer"),
            ("opportunity id",),
            ("opportunity offline score",),
        ),
    ),
    ClassifierRule(
        ReportType.SALES,
        (
            ("order number",),
            ("vin", "delivery date"),
            ("booking to delivery",),
        ),
    ),
    ClassifierRule(
        ReportType.INVENTORY,
        (
            ("ageing", "vin"),
            ("vehicle identification number",),
        ),
    ),
)


def header_line(columns: Iterable[str] | str) -> str:
    """Lowercase the header and collapse runs of whitespace."""
    text = columns.lower() if isinstance(columns, str) else row_text(columns)
    return " ".join(text.split())


def classify_header(
    columns: Iterable[str] | str,
    rules: Iterable[ClassifierRule] = CLASSIFIER_RULES,
) -> ReportType:
    """Classify a header (column names or full line). Returns UNKNOWN when no rule matches."""
    line = header_line(columns)
    for rule in rules:
        if rule.matches(line):
            return rule.report_type
    return ReportType.UNKNOWN
