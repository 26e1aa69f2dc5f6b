"""
Type payload parser — ``export type typePayload = { ... }`` → ordered fields.

The declaration body is found with an explicit brace-depth scan rather
than a regex, so a field whose type is itself an object literal does not
end the body early. Inside the body, fields end at a newline or at a
``;`` outside braces:

    name: string;
    description?: string;          // trailing comments are ignored
    tags: string[];
    address: { street: string; city: string };
    meta: {
      source: 'web' | 'api';
    };

Nested object types are kept as opaque text. Nesting deeper than one
level is rejected.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from crudgen.core.models.field import ParsedTypePayload, PayloadField

logger = logging.getLogger(__name__)

PAYLOAD_TYPE_NAME = "typePayload"

_DECLARATION_RE = re.compile(r"export\s+type\s+" + PAYLOAD_TYPE_NAME + r"\s*=\s*\{")
_FIELD_RE = re.compile(
    r"^(?P<name>[A-Za-z_$][A-Za-z0-9_$]*)(?P<optional>\?)?\s*:\s*(?P<type>.*?)\s*$",
    re.DOTALL,
)
_QUOTES = "'\"`"

# Deepest brace level allowed inside a field's type text
_MAX_NESTING = 1


class ParseError(Exception):
    """Raised when a payload declaration cannot be parsed.

    Attributes:
        source_path: File the declaration came from.
        line_number: 1-based line of the problem, if known.
        line:        Literal content of the offending line, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        source_path: str = "<string>",
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        self.reason = message
        self.source_path = source_path
        self.line_number = line_number
        self.line = line
        location = source_path if line_number is None else f"{source_path}:{line_number}"
        detail = f": {line!r}" if line is not None else ""
        super().__init__(f"{location}: {message}{detail}")


@dataclass
class _Entry:
    """Raw text of one field, possibly spanning several lines."""

    line_number: int
    line: str
    parts: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(p for p in (s.strip() for s in self.parts) if p)


# ── Scanning helpers ────────────────────────────────────────────


def _find_closing_brace(text: str, open_index: int) -> int:
    """Index of the ``}`` matching the ``{`` at ``open_index``, or -1.

    Braces inside string literals and comments are not counted.
    """
    depth = 1
    quote: str | None = None
    i = open_index + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif text.startswith("//", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline
            continue
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        elif ch in _QUOTES:
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _strip_comments(line: str) -> tuple[str, bool]:
    """Drop ``//`` tails and ``/* */`` spans outside string literals.

    Returns:
        (remaining code, whether a block comment is left open)
    """
    out: list[str] = []
    quote: str | None = None
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(line[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif line.startswith("//", i):
            break
        elif line.startswith("/*", i):
            end = line.find("*/", i + 2)
            if end == -1:
                return "".join(out).strip(), True
            i = end + 2
            continue
        else:
            if ch in _QUOTES:
                quote = ch
            out.append(ch)
        i += 1
    return "".join(out).strip(), False


def _code_lines(body: str, first_line: int) -> Iterator[tuple[int, str, str]]:
    """Yield (line number, trimmed line, code) for lines that carry code."""
    in_block_comment = False
    for offset, raw in enumerate(body.split("\n")):
        line = raw.strip()
        rest = line
        if in_block_comment:
            end = rest.find("*/")
            if end == -1:
                continue
            rest = rest[end + 2:]
            in_block_comment = False
        elif rest.startswith("*"):
            # stray JSDoc continuation
            continue
        code, in_block_comment = _strip_comments(rest)
        if code:
            yield first_line + offset, line, code


# ── Parsing ─────────────────────────────────────────────────────


def _extract_body(text: str, source_path: str) -> tuple[str, int]:
    """Locate the declaration and return (body text, line number of its ``{``)."""
    match = _DECLARATION_RE.search(text)
    if match is None:
        raise ParseError(
            f"no 'export type {PAYLOAD_TYPE_NAME} = {{' declaration found",
            source_path=source_path,
        )

    open_index = match.end() - 1
    start_line = text.count("\n", 0, open_index) + 1
    close_index = _find_closing_brace(text, open_index)
    if close_index == -1:
        raise ParseError(
            f"unbalanced braces in {PAYLOAD_TYPE_NAME} declaration",
            source_path=source_path,
            line_number=start_line,
        )

    return text[open_index + 1:close_index], start_line


def _split_entries(body: str, first_line: int, source_path: str) -> list[_Entry]:
    """Cut the body into one entry per field.

    An entry ends at a newline or a ``;`` while outside braces; inside a
    nested object both are kept as part of the type text.
    """
    entries: list[_Entry] = []
    current: _Entry | None = None
    depth = 0

    for line_number, line, code in _code_lines(body, first_line):
        chunk: list[str] = []
        quote: str | None = None
        for ch in code:
            if current is None and not ch.isspace() and ch != ";":
                current = _Entry(line_number=line_number, line=line)
            if quote:
                if ch == quote:
                    quote = None
            elif ch in _QUOTES:
                quote = ch
            elif ch == "{":
                depth += 1
                if depth > _MAX_NESTING:
                    raise ParseError(
                        "object types nested more than one level deep are not supported",
                        source_path=source_path, line_number=line_number, line=line,
                    )
            elif ch == "}":
                depth -= 1
                if depth < 0:
                    raise ParseError(
                        "unbalanced braces in field type",
                        source_path=source_path, line_number=line_number, line=line,
                    )
            elif ch == ";" and depth == 0:
                if current is not None:
                    current.parts.append("".join(chunk))
                    entries.append(current)
                current, chunk = None, []
                continue
            chunk.append(ch)

        if current is not None:
            current.parts.append("".join(chunk))
            if depth == 0:
                entries.append(current)
                current = None

    if current is not None:
        raise ParseError(
            "unterminated nested object type",
            source_path=source_path, line_number=current.line_number, line=current.line,
        )
    return entries


def _parse_fields(body: str, first_line: int, source_path: str) -> list[PayloadField]:
    fields: list[PayloadField] = []
    seen: dict[str, int] = {}

    for entry in _split_entries(body, first_line, source_path):
        match = _FIELD_RE.match(entry.text)
        if match is None:
            raise ParseError(
                "cannot parse field line",
                source_path=source_path, line_number=entry.line_number, line=entry.line,
            )

        name = match.group("name")
        type_text = match.group("type")
        if not type_text:
            raise ParseError(
                f"field {name!r} has no type",
                source_path=source_path, line_number=entry.line_number, line=entry.line,
            )
        if name in seen:
            raise ParseError(
                f"duplicate field {name!r} (first declared on line {seen[name]})",
                source_path=source_path, line_number=entry.line_number, line=entry.line,
            )

        seen[name] = entry.line_number
        fields.append(PayloadField(
            name=name,
            optional=match.group("optional") is not None,
            type_expression=type_text,
            line=entry.line_number,
        ))

    return fields


def parse_type_payload(text: str, source_path: str = "<string>") -> ParsedTypePayload:
    """Parse the ``typePayload`` declaration contained in ``text``.

    Args:
        text: Full source text of a type file.
        source_path: Name used in error messages.

    Returns:
        ParsedTypePayload with fields in declaration order.

    Raises:
        ParseError: Declaration missing, braces unbalanced, an entry that
            is not a field, too-deep nesting, or a duplicate field name.
    """
    body, first_line = _extract_body(text, source_path)
    fields = _parse_fields(body, first_line, source_path)
    logger.debug("Parsed %d field(s) from %s", len(fields), source_path)
    return ParsedTypePayload(fields=tuple(fields), source_path=source_path)


def parse_type_file(path: Path) -> ParsedTypePayload:
    """Read and parse one type file. I/O errors propagate."""
    text = path.read_text(encoding="utf-8")
    return parse_type_payload(text, source_path=str(path))
