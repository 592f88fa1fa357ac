"""Tests for the env(), indent() and read_file() template globals."""

import pytest

from tinc.errors import FileReadError, MissingEnvVarError
from tinc.functions import INDENT_UNIT, get_env, indent, indent_lines, read_file


class TestIndent:
    @pytest.mark.parametrize(
        ("level", "text", "expected"),
        [
            (2, "hello", "hello"),
            (2, "line1\nline2\nline3", "line1\n    line2\n    line3"),
            (0, "line1\nline2", "line1\nline2"),
            (2, "", ""),
            (1, "\n", "\n  "),
            (3, "a\nb", "a\n      b"),
        ],
    )
    def test_indent(self, level, text, expected):
        assert indent(level, text) == expected

    def test_unit_is_two_spaces(self):
        assert INDENT_UNIT == 2

    def test_indent_lines_leaves_first_line(self):
        assert indent_lines("a\nb\n", "> ") == "a\n> b\n> "

    def test_indent_lines_empty_prefix(self):
        assert indent_lines("a\nb", "") == "a\nb"


class TestGetEnv:
    def test_existing_var(self, monkeypatch):
        monkeypatch.setenv("TINC_TEST_VAR_EXISTS", "test_value")
        assert get_env("TINC_TEST_VAR_EXISTS") == "test_value"

    def test_missing_var_raises(self, monkeypatch):
        monkeypatch.delenv("TINC_TEST_VAR_NOT_EXISTS", raising=False)
        with pytest.raises(MissingEnvVarError) as exc:
            get_env("TINC_TEST_VAR_NOT_EXISTS")
        assert exc.value.name == "TINC_TEST_VAR_NOT_EXISTS"
        assert "is not defined" in str(exc.value)

    def test_empty_var_raises(self, monkeypatch):
        monkeypatch.setenv("TINC_TEST_VAR_EMPTY", "")
        with pytest.raises(MissingEnvVarError):
            get_env("TINC_TEST_VAR_EMPTY")

    def test_blank_var_raises(self, monkeypatch):
        monkeypatch.setenv("TINC_TEST_VAR_BLANK", "   ")
        with pytest.raises(MissingEnvVarError):
            get_env("TINC_TEST_VAR_BLANK")


class TestReadFile:
    def test_reads_contents_verbatim(self, tmp_path):
        f = tmp_path / "test.txt"
        f.write_text("hello\nworld\n{{ not rendered }}")
        assert read_file(str(f)) == "hello\nworld\n{{ not rendered }}"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileReadError) as exc:
            read_file(str(tmp_path / "nope.txt"))
        assert "nope.txt" in str(exc.value)

    def test_directory_raises(self, tmp_path):
        with pytest.raises(FileReadError):
            read_file(str(tmp_path))

    def test_relative_to_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "rel.txt").write_text("relative")
        monkeypatch.chdir(tmp_path)
        assert read_file("rel.txt") == "relative"
