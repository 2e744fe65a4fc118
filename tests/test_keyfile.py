"""
Key file codec tests
"""

import pytest

from fsearch.config.keyfile import KeyFile, escape_string, unescape_string
from fsearch.errors import ConfigSaveError, KeyFileError, KeyFileErrorCode


def parse(text: str) -> KeyFile:
    key_file = KeyFile()
    key_file.load_from_string(text)
    return key_file


class TestParsing:
    """Group and key parsing"""

    def test_groups_and_keys_in_file_order(self):
        key_file = parse("[A]\nx=1\ny=2\n\n[B]\nz=3\n")

        assert key_file.get_groups() == ["A", "B"]
        assert key_file.get_keys("A") == ["x", "y"]
        assert key_file.get_value("B", "z") == "3"

    def test_whitespace_around_delimiter_is_ignored(self):
        key_file = parse("[Search]\nnum_results   =  500\n")

        assert key_file.get_integer("Search", "num_results") == 500

    def test_comments_are_skipped(self):
        key_file = parse("# settings\n[A]\n# note\nx=1\n")

        assert key_file.get_keys("A") == ["x"]

    def test_keys_are_case_sensitive(self):
        key_file = parse("[A]\nKey=1\n")

        assert key_file.get_value("A", "Key") == "1"
        with pytest.raises(KeyFileError) as exc_info:
            key_file.get_value("A", "key")
        assert exc_info.value.code is KeyFileErrorCode.KEY_NOT_FOUND

    def test_indented_lines_are_separate_entries(self):
        key_file = parse(
            "[Search]\nmatch_case=true\n  enable_regex=true\n"
            "\t[Database]\n  location_1=/a\n"
        )

        assert key_file.get_boolean("Search", "match_case") is True
        assert key_file.get_boolean("Search", "enable_regex") is True
        assert key_file.get_keys("Database") == ["location_1"]

    def test_duplicate_key_last_wins(self):
        key_file = parse("[A]\nx=1\nx=2\n")

        assert key_file.get_integer("A", "x") == 2

    def test_entry_before_group_is_malformed(self):
        with pytest.raises(KeyFileError) as exc_info:
            parse("x=1\n[A]\n")
        assert exc_info.value.code is KeyFileErrorCode.PARSE

    def test_line_without_delimiter_is_malformed(self):
        with pytest.raises(KeyFileError) as exc_info:
            parse("[A]\njust some text\n")
        assert exc_info.value.code is KeyFileErrorCode.PARSE

    def test_invalid_utf8_file_is_malformed(self, tmp_path):
        path = tmp_path / "bad.conf"
        path.write_bytes(b"[A]\nx=\xff\xfe\n")

        with pytest.raises(KeyFileError) as exc_info:
            KeyFile().load_from_file(path)
        assert exc_info.value.code is KeyFileErrorCode.PARSE

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            KeyFile().load_from_file(tmp_path / "missing.conf")


class TestTypedLookup:
    """Typed getters"""

    @pytest.mark.parametrize("raw, expected", [
        ("true", True),
        ("false", False),
        ("1", True),
        ("0", False),
    ])
    def test_boolean_literals(self, raw, expected):
        assert parse(f"[A]\nflag={raw}\n").get_boolean("A", "flag") is expected

    @pytest.mark.parametrize("raw", ["notabool", "True", "yes", ""])
    def test_invalid_boolean(self, raw):
        key_file = parse(f"[A]\nflag={raw}\n")

        with pytest.raises(KeyFileError) as exc_info:
            key_file.get_boolean("A", "flag")
        assert exc_info.value.code is KeyFileErrorCode.INVALID_VALUE

    @pytest.mark.parametrize("raw, expected", [("42", 42), ("+7", 7), ("-3", -3), ("0", 0)])
    def test_integer_values(self, raw, expected):
        assert parse(f"[A]\nn={raw}\n").get_integer("A", "n") == expected

    @pytest.mark.parametrize("raw", ["4x", "1.5", "1_000", "ten"])
    def test_invalid_integer(self, raw):
        key_file = parse(f"[A]\nn={raw}\n")

        with pytest.raises(KeyFileError) as exc_info:
            key_file.get_integer("A", "n")
        assert exc_info.value.code is KeyFileErrorCode.INVALID_VALUE

    def test_missing_group(self):
        with pytest.raises(KeyFileError) as exc_info:
            parse("[A]\nx=1\n").get_string("B", "x")

        assert exc_info.value.code is KeyFileErrorCode.GROUP_NOT_FOUND
        assert exc_info.value.is_missing

    def test_string_escapes_are_decoded(self):
        key_file = parse("[A]\npath=\\s/tmp/a\\\\b\\tc\n")

        assert key_file.get_string("A", "path") == " /tmp/a\\b\tc"


class TestEscaping:
    """String escaping"""

    def test_plain_string_is_unchanged(self):
        assert escape_string("/home/user/Music") == "/home/user/Music"

    def test_special_characters(self):
        assert escape_string("a\\b\nc\td\re") == "a\\\\b\\nc\\td\\re"

    def test_surrounding_spaces(self):
        assert escape_string("  /x ") == "\\s\\s/x\\s"

    def test_inner_spaces_are_kept(self):
        assert escape_string("/my files/x") == "/my files/x"

    def test_unescape_reverses_escape(self):
        value = " /odd\\path\nwith\ttabs "
        assert unescape_string(escape_string(value)) == value

    def test_invalid_escape_sequence(self):
        with pytest.raises(KeyFileError) as exc_info:
            unescape_string("C:\\q")
        assert exc_info.value.code is KeyFileErrorCode.INVALID_VALUE

    def test_incomplete_escape_sequence(self):
        with pytest.raises(KeyFileError) as exc_info:
            unescape_string("trailing\\")
        assert exc_info.value.code is KeyFileErrorCode.INVALID_VALUE


class TestWriting:
    """Serialization"""

    def test_to_string_layout(self):
        key_file = KeyFile()
        key_file.set_boolean("Interface", "show_menubar", True)
        key_file.set_integer("Search", "num_results", 10)
        key_file.set_string("Database", "location_1", "/a b")

        assert key_file.to_string() == (
            "[Interface]\n"
            "show_menubar=true\n"
            "\n"
            "[Search]\n"
            "num_results=10\n"
            "\n"
            "[Database]\n"
            "location_1=/a b\n"
            "\n"
        )

    def test_unencodable_value_keeps_existing_file(self, tmp_path):
        path = tmp_path / "out.conf"
        path.write_text("[Search]\nnum_results=7\n", encoding="utf-8")
        key_file = KeyFile()
        key_file.set_string("Database", "location_1", "/data/caf\udce9")

        with pytest.raises(ConfigSaveError):
            key_file.save_to_file(path)

        assert path.read_text(encoding="utf-8") == "[Search]\nnum_results=7\n"

    def test_written_file_parses_back(self, tmp_path):
        path = tmp_path / "out.conf"
        key_file = KeyFile()
        key_file.set_string("Database", "location_1", " /spaced ")
        key_file.set_boolean("Search", "match_case", False)
        key_file.save_to_file(path)

        loaded = KeyFile()
        loaded.load_from_file(path)
        assert loaded.get_string("Database", "location_1") == " /spaced "
        assert loaded.get_boolean("Search", "match_case") is False
