"""Tests for result line formatting."""

from pwnedaudit.hibp.formatting import format_result, format_status
from pwnedaudit.hibp.models import AuditResult, CheckStatus


class TestFormatStatus:

    def test_vulnerable_line(self):
        line = format_status(CheckStatus.VULN, "a.txt", "hunter2", 1, 3)
        assert line == "[red][VULN][/red] a.txt (hunter2) (1 of 3)"

    def test_safe_line(self):
        line = format_status(CheckStatus.SAFE, "b.txt", "x9!Qz", 2, 3)
        assert line == "[green][SAFE][/green] b.txt (x9!Qz) (2 of 3)"

    def test_content_omitted(self):
        line = format_status(CheckStatus.SKIP, "c.txt", None, 3, 3)
        assert line == "[white][SKIP][/white] c.txt (3 of 3)"

    def test_markup_in_content_is_escaped(self):
        line = format_status(CheckStatus.SAFE, "d.txt", "[bold]pw", 1, 1)
        assert "\\[bold]pw" in line

    def test_stateless(self):
        """Same arguments always give the same line."""
        first = format_status(CheckStatus.VULN, "a.txt", "pw", 1, 2)
        format_status(CheckStatus.SAFE, "b.txt", "pw", 2, 2)
        assert format_status(CheckStatus.VULN, "a.txt", "pw", 1, 2) == first


class TestFormatResult:

    def test_hides_secret(self):
        result = AuditResult(name="a.txt", index=1, total=1, status=CheckStatus.VULN, display="hunter2")
        assert "hunter2" not in format_result(result, show_content=False)
        assert "hunter2" in format_result(result)

    def test_skip_shows_reason(self):
        result = AuditResult(
            name="a.txt", index=1, total=2, status=CheckStatus.SKIP, error="multiple lines"
        )
        assert format_result(result) == "[white][SKIP][/white] a.txt (multiple lines) (1 of 2)"

    def test_error_shows_message(self):
        result = AuditResult(
            name="a.txt", index=2, total=2, status=CheckStatus.ERROR, display="pw", error="HTTP 500"
        )
        assert format_result(result) == "[yellow][ERROR][/yellow] a.txt (HTTP 500) (2 of 2)"
