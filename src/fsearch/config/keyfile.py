"""Grouped key/value file codec.

Reads and writes the ``[Group]`` / ``key=value`` layout used by the
settings file, including its backslash escapes for string values
(``\\s``, ``\\n``, ``\\t``, ``\\r`` and ``\\\\``).
"""

import configparser
import io
import logging
import re
from pathlib import Path
from typing import List, Union

from ..errors import ConfigSaveError, KeyFileError, KeyFileErrorCode

logger = logging.getLogger(__name__)

# configparser treats its default section specially; keep it out of reach.
_UNUSED_DEFAULT_SECTION = "__fsearch_unused_default__"

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
_TRUE_LITERALS = ("true", "1")
_FALSE_LITERALS = ("false", "0")

_UNESCAPES = {
    "s": " ",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
}


def escape_string(value: str) -> str:
    """Escape a string value for writing.

    Args:
        value: Plain string value

    Returns:
        Escaped representation
    """
    escaped = (
        value.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )

    # Surrounding spaces would be stripped by the reader
    stripped = escaped.lstrip(" ")
    leading = len(escaped) - len(stripped)
    body = stripped.rstrip(" ")
    trailing = len(stripped) - len(body)
    return "\\s" * leading + body + "\\s" * trailing


def unescape_string(value: str) -> str:
    """Decode the escape sequences of a stored string value.

    Args:
        value: Raw value as stored in the file

    Returns:
        Decoded string

    Raises:
        KeyFileError: If the value contains an invalid escape sequence
    """
    if "\\" not in value:
        return value

    result = []
    chars = iter(value)
    for char in chars:
        if char != "\\":
            result.append(char)
            continue
        code = next(chars, None)
        if code is None:
            raise KeyFileError(
                KeyFileErrorCode.INVALID_VALUE,
                f"Value '{value}' ends with an incomplete escape sequence",
            )
        if code not in _UNESCAPES:
            raise KeyFileError(
                KeyFileErrorCode.INVALID_VALUE,
                f"Value '{value}' contains invalid escape sequence '\\{code}'",
            )
        result.append(_UNESCAPES[code])
    return "".join(result)


class KeyFile:
    """In-memory grouped key/value document."""

    def __init__(self):
        """Initialize an empty key file."""
        self._parser = self._new_parser()

    @staticmethod
    def _new_parser() -> configparser.ConfigParser:
        parser = configparser.ConfigParser(
            interpolation=None,
            delimiters=("=",),
            comment_prefixes=("#",),
            strict=False,
            default_section=_UNUSED_DEFAULT_SECTION,
        )
        # Keys are case sensitive
        parser.optionxform = str
        return parser

    # Loading

    def load_from_string(self, text: str) -> None:
        """Parse key file text, replacing any current content.

        Args:
            text: Key file content

        Raises:
            KeyFileError: If the text is not a valid key file
        """
        # Leading whitespace is not significant, so no line continues the previous value
        text = "\n".join(line.lstrip() for line in text.split("\n"))

        parser = self._new_parser()
        try:
            parser.read_string(text)
        except configparser.Error as e:
            raise KeyFileError(KeyFileErrorCode.PARSE, f"Malformed key file: {e}") from e
        self._parser = parser

    def load_from_file(self, path: Union[str, Path]) -> None:
        """Read and parse a key file from disk.

        Args:
            path: File to read

        Raises:
            OSError: If the file cannot be read
            KeyFileError: If the content is not valid UTF-8 or not a valid key file
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise KeyFileError(KeyFileErrorCode.PARSE, f"Key file is not valid UTF-8: {e}") from e
        self.load_from_string(text)

    # Lookup

    def get_groups(self) -> List[str]:
        """List the groups in file order."""
        return self._parser.sections()

    def get_keys(self, group: str) -> List[str]:
        """List the keys of a group in file order.

        Raises:
            KeyFileError: If the group does not exist
        """
        if not self._parser.has_section(group):
            raise KeyFileError(KeyFileErrorCode.GROUP_NOT_FOUND, f"Key file does not have group '{group}'")
        return list(self._parser[group].keys())

    def get_value(self, group: str, key: str) -> str:
        """Return the raw stored value of a key.

        Raises:
            KeyFileError: If the group or the key does not exist
        """
        if not self._parser.has_section(group):
            raise KeyFileError(KeyFileErrorCode.GROUP_NOT_FOUND, f"Key file does not have group '{group}'")
        if not self._parser.has_option(group, key):
            raise KeyFileError(
                KeyFileErrorCode.KEY_NOT_FOUND,
                f"Key file does not have key '{key}' in group '{group}'",
            )
        return self._parser.get(group, key)

    def get_string(self, group: str, key: str) -> str:
        return unescape_string(self.get_value(group, key))

    def get_boolean(self, group: str, key: str) -> bool:
        """Return a boolean value.

        Raises:
            KeyFileError: If the key is missing or not a boolean literal
        """
        value = self.get_value(group, key).strip()
        if value in _TRUE_LITERALS:
            return True
        if value in _FALSE_LITERALS:
            return False
        raise KeyFileError(
            KeyFileErrorCode.INVALID_VALUE,
            f"Key '{key}' in group '{group}' has value '{value}' which cannot be interpreted as a boolean",
        )

    def get_integer(self, group: str, key: str) -> int:
        """Return an integer value.

        Raises:
            KeyFileError: If the key is missing or not a decimal integer
        """
        value = self.get_value(group, key).strip()
        if not _INTEGER_RE.match(value):
            raise KeyFileError(
                KeyFileErrorCode.INVALID_VALUE,
                f"Key '{key}' in group '{group}' has value '{value}' which cannot be interpreted as a number",
            )
        return int(value)

    # Mutation

    def _ensure_group(self, group: str) -> None:
        if not self._parser.has_section(group):
            self._parser.add_section(group)

    def set_value(self, group: str, key: str, value: str) -> None:
        self._ensure_group(group)
        self._parser.set(group, key, value)

    def set_string(self, group: str, key: str, value: str) -> None:
        self.set_value(group, key, escape_string(value))

    def set_boolean(self, group: str, key: str, value: bool) -> None:
        self.set_value(group, key, "true" if value else "false")

    def set_integer(self, group: str, key: str, value: int) -> None:
        self.set_value(group, key, str(int(value)))

    # Saving

    def to_string(self) -> str:
        """Serialize the key file."""
        buffer = io.StringIO()
        self._parser.write(buffer, space_around_delimiters=False)
        return buffer.getvalue()

    def save_to_file(self, path: Union[str, Path]) -> None:
        """Write the key file to disk, overwriting any existing file.

        Raises:
            OSError: If the file cannot be written
            ConfigSaveError: If the content cannot be encoded as UTF-8
        """
        text = self.to_string()
        # Encode first so an unencodable value never truncates the file
        try:
            data = text.encode("utf-8")
        except UnicodeError as e:
            raise ConfigSaveError(f"Key file content is not valid UTF-8: {e}") from e
        Path(path).write_bytes(data)
        logger.debug(f"Wrote {len(data)} bytes to {path}")
