"""Raw row representation before mapping."""

from pydantic import BaseModel, ConfigDict, Field


class RawRow(BaseModel):
    """
    One data line of an uploaded report.
    Keys are the header cells as found in the file (case preserved), in column order.
    """

    model_config = ConfigDict(frozen=True)

    data: dict[str, str] = Field(default_factory=dict)
    line_number: int = 0

    def get(self, column: str, default: str = "") -> str:
        """Value of an exact column name, or default."""
        return self.data.get(column, default)
