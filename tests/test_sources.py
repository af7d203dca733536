"""Tests for password file sources."""

from pwnedaudit.hibp.sources import iter_directory, parse_secret_text, read_secret_file


class TestParseSecretText:
    """Test the one-password-per-file rule."""

    def test_single_line(self):
        item = parse_secret_text("a.txt", "hunter2")
        assert item.secret == b"hunter2"
        assert item.display == "hunter2"
        assert not item.skipped

    def test_trailing_newline_allowed(self):
        assert parse_secret_text("a.txt", "hunter2\n").secret == b"hunter2"

    def test_crlf_stripped(self):
        assert parse_secret_text("a.txt", "hunter2\r\n").secret == b"hunter2"

    def test_trailing_blank_lines_allowed(self):
        assert parse_secret_text("a.txt", "hunter2\n\n\n").secret == b"hunter2"

    def test_second_line_skips(self):
        item = parse_secret_text("a.txt", "hunter2\nletmein\n")
        assert item.skipped
        assert item.skip_reason == "multiple lines"

    def test_whitespace_only_second_line_skips(self):
        """Only truly empty lines are tolerated after the first."""
        assert parse_secret_text("a.txt", "hunter2\n \n").skipped

    def test_crlf_blank_second_line_skips(self):
        # "\r" left after splitting on "\n" counts as content
        assert parse_secret_text("a.txt", "hunter2\r\n\r\n").skipped

    def test_empty_file_skips(self):
        item = parse_secret_text("a.txt", "")
        assert item.skipped
        assert item.skip_reason == "empty"

    def test_newline_only_skips(self):
        assert parse_secret_text("a.txt", "\n").skip_reason == "empty"

    def test_inner_whitespace_kept(self):
        assert parse_secret_text("a.txt", "  pass word \n").secret == b"  pass word "

    def test_utf8_encoding(self):
        assert parse_secret_text("a.txt", "pässwörd").secret == "pässwörd".encode("utf-8")


def test_read_secret_file(tmp_path):
    path = tmp_path / "admin.txt"
    path.write_text("hunter2\n")

    item = read_secret_file(path)

    assert item.name == "admin.txt"
    assert item.secret == b"hunter2"


def test_read_secret_file_binary_is_skipped(tmp_path):
    path = tmp_path / "blob.txt"
    path.write_bytes(b"\xff\xfe\x00junk")

    item = read_secret_file(path)

    assert item.skipped
    assert item.skip_reason == "not UTF-8 text"


def test_iter_directory_sorted_and_filtered(tmp_path):
    (tmp_path / "b.txt").write_text("two")
    (tmp_path / "a.txt").write_text("one")
    (tmp_path / "notes.md").write_text("ignored")
    (tmp_path / "dir.txt").mkdir()

    items = list(iter_directory(tmp_path))

    assert [i.name for i in items] == ["a.txt", "b.txt"]
    assert [i.secret for i in items] == [b"one", b"two"]


def test_iter_directory_custom_pattern(tmp_path):
    (tmp_path / "a.pw").write_text("one")
    (tmp_path / "b.txt").write_text("two")

    assert [i.name for i in iter_directory(tmp_path, "*.pw")] == ["a.pw"]


def test_iter_directory_empty(tmp_path):
    assert list(iter_directory(tmp_path)) == []


def test_read_secret_file_keeps_crlf_semantics(tmp_path):
    path = tmp_path / "win.txt"
    path.write_bytes(b"\xef\xbb\xbfhunter2\r\n")

    assert read_secret_file(path).secret == b"hunter2"
