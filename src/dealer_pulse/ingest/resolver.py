"""Two-tier column lookup that tolerates header drift between DMS exports."""

import re
from functools import lru_cache
from typing import Optional, Sequence

from dealer_pulse.models.raw import RawRow

_NOISE = re.compile(r"[\s_().-]")


@lru_cache(maxsize=1024)
def normalize_key(name: str) -> str:
    """Lowercase and drop whitespace, underscores, parentheses, dots and hyphens."""
    return _NOISE.sub("", name.lower())


class FieldResolver:
    """
    Resolves a canonical field to a value in a raw row.
    Candidates are tried by exact column name first, then by normalized name;
    empty values never count as a match.
    """

    def __init__(self, aliases: Optional[dict[str, list[str]]] = None):
        self.aliases = aliases or {}

    def candidates_for(self, field: str) -> list[str]:
        """Canonical name followed by its aliases."""
        return [field, *self.aliases.get(field, [])]

    def resolve(self, row: RawRow, candidates: str | Sequence[str]) -> str:
        """
        Return the first non-empty value matching the candidates, else "".
        A plain string is expanded through the alias table.
        """
        names = self.candidates_for(candidates) if isinstance(candidates, str) else list(candidates)
        data = row.data

        for name in names:
            value = data.get(name)
            if value:
                return value

        wanted = {normalize_key(n) for n in names}
        for column, value in data.items():
            if value and normalize_key(column) in wanted:
                return value
        return ""
