"""Unit tests for the CSV tokenizer."""

from dealer_pulse.ingest.tokenizer import build_raw_row, row_text, split_fields, split_rows


class TestSplitRows:
    """Tests for split_rows."""

    def test_quoted_delimiter_stays_in_field(self) -> None:
        """A comma inside quotes does not split the field."""
        assert split_fields('"Smith, John",42') == ["Smith, John", "42"]

    def test_crlf_and_lf_line_endings(self) -> None:
        """Both \\r\\n and \\n end a row."""
        rows = split_rows("a,b\r\n1,2\n3,4\n")
        assert rows == [["a", "b"], ["1", "2"], ["3", "4"]]

    def test_blank_and_whitespace_rows_removed(self) -> None:
        """Empty lines, whitespace lines and all-empty field rows are dropped."""
        rows = split_rows("a,b\n\n   \n,,\n1,2\n")
        assert rows == [["a", "b"], ["1", "2"]]

    def test_quoted_newline_is_not_a_row_break(self) -> None:
        """A newline inside quotes stays inside the field."""
        rows = split_rows('id,note\n1,"line one\nline two"\n2,x\n')
        assert len(rows) == 3
        assert rows[1] == ["1", "line one\nline two"]

    def test_doubled_quote_is_literal(self) -> None:
        """"" inside a quoted field yields a single quote."""
        assert split_fields('"He said ""hi""",ok') == ['He said "hi"', "ok"]

    def test_fields_trimmed_and_unquoted(self) -> None:
        """Surrounding whitespace and quotes are removed."""
        assert split_fields('  a ,  "b c"  , d') == ["a", "b c", "d"]

    def test_bom_stripped(self) -> None:
        """Leading UTF-8 BOM does not leak into the first header."""
        rows = split_rows("\ufeffVIN,Model\nA1,X\n")
        assert rows[0][0] == "VIN"

    def test_empty_text(self) -> None:
        """Empty input yields no rows."""
        assert split_rows("") == []
        assert split_fields("") == []


class TestBuildRawRow:
    """Tests for build_raw_row."""

    def test_short_row_padded(self) -> None:
        """Missing trailing fields map to empty string."""
        row = build_raw_row(["A", "B", "C"], ["1"])
        assert row.data == {"A": "1", "B": "", "C": ""}

    def test_long_row_truncated(self) -> None:
        """Extra fields beyond the header are dropped."""
        row = build_raw_row(["A", "B"], ["1", "2", "3", "4"])
        assert row.data == {"A": "1", "B": "2"}

    def test_header_order_and_case_preserved(self) -> None:
        """Keys keep their header spelling and column order."""
        row = build_raw_row(["Lead ID", "Name"], ["L1", "Ann"], line_number=5)
        assert list(row.data) == ["Lead ID", "Name"]
        assert row.line_number == 5

    def test_blank_headers_skipped_first_duplicate_wins(self) -> None:
        """Columns with empty headers are ignored; duplicates keep the first value."""
        row = build_raw_row(["Status", "", "Status"], ["Open", "x", "Closed"])
        assert row.data == {"Status": "Open"}

    def test_row_text_lowercases(self) -> None:
        assert row_text(["Lead ID", "Source"]) == "lead id,source"
