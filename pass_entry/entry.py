"""Decoding of ``pass`` password store entries.

``pass`` entries follow an informal schema: the first line holds the
password, and by convention many consumers read ``login:`` and ``url:``
directives from the lines below it. Everything else is free-form text.

This module handles:
  - Validating that raw entry bytes are UTF-8 text
  - Splitting the text into the secret line and metadata lines
  - Extracting the ``login`` and ``url`` directives
  - Keeping all other lines, in order, as comments
"""

from dataclasses import dataclass
from typing import Optional

DIRECTIVES = ("login", "url")


class DecodeError(ValueError):
    """Base exception for entry decoding failures."""


class InvalidEncodingError(DecodeError):
    """Raised when the entry content is not valid UTF-8."""


class EmptyEntryError(DecodeError):
    """Raised when the entry content has no secret line."""


@dataclass(frozen=True)
class Entry:
    """A decoded password store entry."""

    name: str
    secret: str
    login: Optional[str] = None
    url: Optional[str] = None
    comments: tuple[str, ...] = ()

    @property
    def password(self) -> str:
        return self.secret

    @property
    def notes(self) -> Optional[str]:
        """The comment lines joined back into text, or None if there are none."""
        if not self.comments:
            return None
        return "".join(f"{line}\n" for line in self.comments)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "secret": self.secret,
            "login": self.login,
            "url": self.url,
            "comments": list(self.comments),
            "notes": self.notes,
        }


def _split_lines(text: str) -> list[str]:
    """Split entry text on ``\\n``, tolerating ``\\r\\n`` terminators.

    A single terminating newline does not produce a trailing empty line.
    """
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _parse_directive(line: str) -> Optional[tuple[str, str]]:
    """Return ``(key, value)`` if the line is a recognised directive."""
    key, sep, value = line.lstrip().partition(":")
    if not sep:
        return None
    key = key.lower()
    if key not in DIRECTIVES:
        return None
    return key, value.strip()


def decode_str(name: str, text: str) -> Entry:
    """Decode an entry from already-decoded text.

    Args:
        name: Identifier of the entry, e.g. ``email/personal``. Stored as is.
        text: Full entry body.

    Returns:
        The decoded Entry.

    Raises:
        EmptyEntryError: If the text is empty.
    """
    if not text:
        raise EmptyEntryError(f"Entry '{name}' is empty (no secret line)")

    secret, *rest = _split_lines(text)
    fields: dict[str, str] = {}
    comments: list[str] = []

    for line in rest:
        directive = _parse_directive(line)
        # First occurrence wins; repeats are kept as comments
        if directive is None or directive[0] in fields:
            comments.append(line)
            continue
        key, value = directive
        fields[key] = value

    return Entry(
        name=name,
        secret=secret,
        login=fields.get("login"),
        url=fields.get("url"),
        comments=tuple(comments),
    )


def decode(name: str, content: bytes) -> Entry:
    """Decode an entry from raw UTF-8 bytes.

    This is handy for the output of ``pass show``::

        output = subprocess.run(
            ["pass", "show", name], capture_output=True, check=True
        ).stdout
        entry = decode(name, output)

    Args:
        name: Identifier of the entry. Stored as is.
        content: Raw entry bytes, as produced by decrypting the entry file.

    Returns:
        The decoded Entry.

    Raises:
        TypeError: If content is not bytes-like.
        InvalidEncodingError: If content is not valid UTF-8.
        EmptyEntryError: If content is empty.
    """
    if not isinstance(content, (bytes, bytearray, memoryview)):
        raise TypeError("Content must be bytes")

    try:
        text = bytes(content).decode("utf-8")
    except UnicodeDecodeError as exc:
        # Do not echo the offending bytes, they may be secret material
        raise InvalidEncodingError(
            f"Entry '{name}' is not valid UTF-8 (byte offset {exc.start})"
        ) from exc

    return decode_str(name, text)
